import io

from PIL import Image

from config import settings

# A4 portrait in inches
A4_WIDTH_IN, A4_HEIGHT_IN = 8.27, 11.69


def page_size(dpi: int):
    return int(round(A4_WIDTH_IN * dpi)), int(round(A4_HEIGHT_IN * dpi))


def fit_to_page(image_size, page):
    """Fit to the page width; images taller than the page are scaled to its height instead."""
    image_width, image_height = image_size
    page_width, page_height = page

    width, height = page_width, round(image_height * page_width / image_width)
    if height > page_height:
        width, height = round(image_width * page_height / image_height), page_height
    return width, height


def encode_pdf(image: Image.Image, dpi: int = None, quality: int = None) -> bytes:
    """Place the bitmap on a single A4 page and return the PDF bytes."""
    dpi = dpi or settings.EXPORT_DPI
    quality = quality or settings.EXPORT_JPEG_QUALITY

    page = Image.new("RGB", page_size(dpi), "white")
    width, height = fit_to_page(image.size, page.size)
    scaled = image.convert("RGB").resize((width, height), Image.LANCZOS)
    page.paste(scaled, ((page.width - width) // 2, 0))

    buffered = io.BytesIO()
    page.save(buffered, format="PDF", resolution=dpi, quality=quality)
    return buffered.getvalue()


def encode_png(image: Image.Image) -> bytes:
    buffered = io.BytesIO()
    image.save(buffered, format="PNG")
    return buffered.getvalue()
