import requests
import logging
from typing import Optional
from urllib.parse import quote, urlencode

from config import settings
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from utilities.formatting import format_amount, format_invoice_number, format_share_date
from utilities.phone_utils import normalize_indian_phone

logger = logging.getLogger(__name__)


def compose_share_message(invoice: InvoiceResponse) -> str:
    """Prefilled chat message for the web composer fallback."""
    return (
        f"🚗 *{settings.BUSINESS_NAME}*\n"
        f"\n"
        f"Invoice #{format_invoice_number(invoice.invoice_number)}\n"
        f"📅 {format_share_date(invoice.invoice_date)}\n"
        f"\n"
        f"🚀 {invoice.pickup_location} ➜ {invoice.destination}\n"
        f"💰 Total: ₹{format_amount(invoice.total_amount)}\n"
        f"\n"
        f"Please find the invoice PDF attached.\n"
        f"\n"
        f"Thank you for choosing {settings.BUSINESS_NAME}! 🙏\n"
        f"📞 Contact: {settings.BUSINESS_CONTACT}"
    )


def compose_share_caption(invoice: InvoiceResponse) -> str:
    """Title and text sent alongside a directly shared document."""
    return (
        f"Invoice #{format_invoice_number(invoice.invoice_number)}\n"
        f"Invoice from {settings.BUSINESS_NAME} - ₹{format_amount(invoice.total_amount)}"
    )


def build_web_share_url(phone: str, message: str) -> str:
    query = urlencode({"phone": normalize_indian_phone(phone), "text": message}, quote_via=quote)
    return f"{settings.WHATSAPP_WEB_URL}?{query}"


class WhatsAppService:
    """Service for sending documents via Meta's WhatsApp Cloud API"""

    def __init__(self, api_key: str = None, phone_id: str = None, base_url: str = None):
        self.api_key = api_key if api_key is not None else settings.META_API_KEY
        self.phone_id = phone_id if phone_id is not None else settings.WHATSAPP_PHONE_ID
        self.base_url = base_url or settings.WHATSAPP_API_URL
        self.timeout = settings.WHATSAPP_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.phone_id)

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}"}

    def upload_media(self, content: bytes, filename: str, mime_type: str = "application/pdf") -> Optional[str]:
        """
        Upload a file to the Cloud API media store.

        Args:
            content: Raw file bytes
            filename: Name shown to the recipient
            mime_type: MIME type of the upload

        Returns:
            Optional[str]: The media id, if successful
        """
        url = f"{self.base_url}/{self.phone_id}/media"
        files = {"file": (filename, content, mime_type)}
        data = {"messaging_product": "whatsapp", "type": mime_type}

        try:
            logger.info(f"Uploading {filename} to WhatsApp media store")
            response = requests.post(url, headers=self._headers(), files=files, data=data, timeout=self.timeout)
            response.raise_for_status()
            media_id = response.json().get("id")
            logger.info(f"WhatsApp media uploaded with id: {media_id}")
            return media_id

        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to upload WhatsApp media: {e}")
            if hasattr(e, "response") and e.response is not None:
                logger.error(f"Response content: {e.response.text}")
            return None

    def send_document(self, recipient_phone: str, media_id: str, filename: str, caption: str = "") -> bool:
        """
        Send a previously uploaded document to a recipient.

        Returns:
            bool: True if the message was accepted, False otherwise
        """
        url = f"{self.base_url}/{self.phone_id}/messages"

        headers = {**self._headers(), "Content-Type": "application/json"}

        payload = {
            "messaging_product": "whatsapp",
            "to": normalize_indian_phone(recipient_phone),
            "type": "document",
            "document": {
                "id": media_id,
                "filename": filename,
                "caption": caption
            }
        }

        try:
            logger.info(f"Sending WhatsApp document {filename} to {payload['to']}")
            response = requests.post(url, headers=headers, json=payload, timeout=self.timeout)
            response.raise_for_status()

            logger.info(f"WhatsApp document sent successfully: {response.json()}")
            return True

        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to send WhatsApp document: {e}")
            if hasattr(e, 'response') and e.response is not None:
                logger.error(f"Response content: {e.response.text}")
            return False

    def share_document(self, recipient_phone: str, content: bytes, filename: str, caption: str = "") -> bool:
        if not self.is_configured:
            return False
        media_id = self.upload_media(content, filename)
        if not media_id:
            return False
        return self.send_document(recipient_phone, media_id, filename, caption)
