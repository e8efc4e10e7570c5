from PIL import Image, ImageDraw, ImageFont
from typing import List, Optional
import os
import logging

from config import settings
from core.documents.dto.response.documenttree import DocumentBlock, DocumentTree

logger = logging.getLogger(__name__)

# A4 portrait at 96 dpi, before the upscale factor is applied
PAGE_WIDTH, PAGE_HEIGHT = 794, 1123


class DocumentRasterizer:
    """Draws a DocumentTree onto a bitmap with Pillow."""

    def __init__(self, scale: int = None):
        self.scale = scale or settings.EXPORT_SCALE
        self.assets_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "assets")

        self.logo = self._load_icon("logo.png")
        self.stamp = self._load_icon("stamp.png")

        self.title_fnt = self._font("DejaVuSans-Bold.ttf", 26)
        self.header_fnt = self._font("DejaVuSans-Bold.ttf", 15)
        self.bold_fnt = self._font("DejaVuSans-Bold.ttf", 12)
        self.regular_fnt = self._font(size=12)
        self.small_fnt = self._font(size=10)

    def _load_icon(self, icon_filename: str):
        icon_path = os.path.join(self.assets_dir, icon_filename)
        if not os.path.exists(icon_path):
            logger.debug(f"Optional asset not found: {icon_path}")
            return None
        try:
            return Image.open(icon_path).convert("RGBA")
        except OSError as e:
            logger.warning(f"Could not load asset {icon_filename}: {str(e)}")
            return None

    # -----------------------------
    #   UI UTILS
    # -----------------------------
    def _px(self, value: float) -> int:
        return int(round(value * self.scale))

    def _font(self, name="DejaVuSans.ttf", size=12):
        """Bundled font first, then system fonts, then Pillow's own."""
        size = self._px(size)
        candidates = [os.path.join(self.assets_dir, name), name, "arial.ttf"]
        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue
        logger.warning("Using default font")
        return ImageFont.load_default(size=size)

    def _row(self, draw, left, right, y, label, value, label_font, value_font, fill="#111111"):
        draw.text((left, y), label, font=label_font, fill="#666666")
        draw.text((right, y), str(value), font=value_font, fill=fill, anchor="ra")

    def _paste(self, img, icon, box):
        icon_resized = icon.resize(box[2:])
        img.paste(icon_resized, box[:2], icon_resized)

    # -----------------------------
    #   LAYOUT
    # -----------------------------
    def rasterize(self, tree: DocumentTree) -> Image.Image:
        width, page_height = self._px(PAGE_WIDTH), self._px(PAGE_HEIGHT)

        # Draw on a tall canvas, then crop to the content (never below one page).
        # Layout is deterministic, so content taller than the canvas needs one redraw at most.
        canvas_height = page_height * 3
        img, bottom = self._paint(tree, width, canvas_height)
        if bottom > canvas_height:
            logger.debug(f"Invoice {tree.invoice_number} is taller than the canvas, redrawing at {bottom}px")
            img, bottom = self._paint(tree, width, bottom)

        return img.crop((0, 0, width, max(page_height, bottom)))

    def _paint(self, tree: DocumentTree, width: int, height: int):
        img = Image.new("RGB", (width, height), "white")
        draw = ImageDraw.Draw(img)

        self.left = self._px(48)
        self.right = width - self._px(48)

        y = self._px(40)
        for block in tree.blocks:
            painter = getattr(self, f"_draw_{block.kind}")
            y = painter(img, draw, block, y, tree)
        return img, y + self._px(32)

    def _section_title(self, draw, y, title: Optional[str]) -> int:
        if not title:
            return y
        draw.text((self.left, y), title.upper(), font=self.header_fnt, fill="#1F3A93")
        y += self._px(22)
        draw.line([(self.left, y), (self.right, y)], fill="#D0D4DC", width=self._px(1))
        return y + self._px(10)

    def _lines(self, draw, lines: List[str], x, y, font, fill="#333333", anchor="la") -> int:
        for line in lines:
            if line:
                draw.text((x, y), line, font=font, fill=fill, anchor=anchor)
                y += self._px(17)
        return y

    def _draw_header(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        x = self.left
        if self.logo:
            self._paste(img, self.logo, (x, y, self._px(64), self._px(64)))
            x += self._px(76)

        draw.text((x, y), block.title or "", font=self.title_fnt, fill="#1F3A93")
        left_y = self._lines(draw, block.lines, x, y + self._px(36), self.small_fnt, fill="#555555")

        draw.text((self.right, y), tree.title, font=self.title_fnt, fill="#111111", anchor="ra")
        right_y = y + self._px(40)
        for row in block.rows:
            draw.text((self.right, right_y), f"{row.label}: {row.value}", font=self.bold_fnt, fill="#333333", anchor="ra")
            right_y += self._px(18)

        y = max(left_y, right_y) + self._px(10)
        draw.line([(self.left, y), (self.right, y)], fill="#1F3A93", width=self._px(2))
        return y + self._px(18)

    def _draw_billed_to(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        y = self._section_title(draw, y, block.title)
        fonts = [self.bold_fnt] + [self.regular_fnt] * len(block.lines)
        for line, font in zip(block.lines, fonts):
            draw.text((self.left, y), line, font=font, fill="#111111")
            y += self._px(18)
        return y + self._px(14)

    def _draw_rows(self, draw, block: DocumentBlock, y: int, columns: int = 2) -> int:
        y = self._section_title(draw, y, block.title)
        column_width = (self.right - self.left) // columns
        gutter = self._px(16)
        for start in range(0, len(block.rows), columns):
            for offset, row in enumerate(block.rows[start:start + columns]):
                left = self.left + offset * column_width
                self._row(draw, left, left + column_width - gutter, y, row.label, row.value,
                          self.regular_fnt, self.bold_fnt)
            y += self._px(20)
        return y + self._px(14)

    def _draw_journey(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        return self._draw_rows(draw, block, y)

    def _draw_usage(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        return self._draw_rows(draw, block, y, columns=3)

    def _draw_route(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        y = self._section_title(draw, y, block.title)
        colors = {"pickup": "#009B51", "stop": "#F39C12", "drop": "#C62828"}
        radius = self._px(6)
        cx = self.left + radius
        step = self._px(34)

        # Connector first so the markers sit on top of it
        if len(block.nodes) > 1:
            top = y + radius
            bottom = y + (len(block.nodes) - 1) * step + radius
            draw.line([(cx, top), (cx, bottom)], fill="#B0B4BC", width=self._px(2))

        for node in block.nodes:
            cy = y + radius
            draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=colors[node.kind])
            draw.text((cx + self._px(18), y - self._px(2)), node.location, font=self.bold_fnt, fill="#111111")
            if node.city:
                draw.text((cx + self._px(18), y + self._px(13)), node.city, font=self.small_fnt, fill="#666666")
            y += step
        return y + self._px(6)

    def _draw_charges(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        y = self._section_title(draw, y, block.title)
        draw.rectangle([self.left, y, self.right, y + self._px(22)], fill="#F1F3F7")
        draw.text((self.left + self._px(8), y + self._px(5)), "Description", font=self.bold_fnt, fill="#333333")
        draw.text((self.right - self._px(8), y + self._px(5)), "Amount", font=self.bold_fnt, fill="#333333", anchor="ra")
        y += self._px(30)

        for row in block.rows:
            font = self.bold_fnt if row.emphasis else self.regular_fnt
            draw.text((self.left + self._px(8), y), row.label, font=font, fill="#111111")
            draw.text((self.right - self._px(8), y), row.value, font=font, fill="#111111", anchor="ra")
            y += self._px(20)
            draw.line([(self.left, y - self._px(4)), (self.right, y - self._px(4))], fill="#E4E6EB", width=1)
        return y + self._px(6)

    def _draw_total(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        for row in block.rows:
            draw.rounded_rectangle([self.left, y, self.right, y + self._px(34)], radius=self._px(6), fill="#1F3A93")
            draw.text((self.left + self._px(12), y + self._px(17)), row.label, font=self.header_fnt,
                      fill="white", anchor="lm")
            draw.text((self.right - self._px(12), y + self._px(17)), row.value, font=self.header_fnt,
                      fill="white", anchor="rm")
            y += self._px(44)
        return self._lines(draw, block.lines, self.left, y, self.regular_fnt) + self._px(24)

    def _draw_signature(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        if self.stamp:
            self._paste(img, self.stamp, (self.right - self._px(90), y, self._px(80), self._px(80)))
        y += self._px(86)
        draw.line([(self.right - self._px(180), y), (self.right, y)], fill="#333333", width=self._px(1))
        y += self._px(6)
        return self._lines(draw, block.lines, self.right, y, self.bold_fnt, anchor="ra") + self._px(20)

    def _draw_footer(self, img, draw, block: DocumentBlock, y: int, tree: DocumentTree) -> int:
        draw.line([(self.left, y), (self.right, y)], fill="#D0D4DC", width=self._px(1))
        y += self._px(10)
        cx = (self.left + self.right) // 2
        return self._lines(draw, block.lines, cx, y, self.small_fnt, fill="#666666", anchor="ma")
