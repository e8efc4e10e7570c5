from pydantic import BaseModel
from typing import Optional


class ShareResult(BaseModel):
    shared_directly: bool
    filename: str
    recipient: str
    message: str
    whatsapp_url: Optional[str] = None
    download_url: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "shared_directly": False,
                "filename": "Asha_Patil_invoice_0042.pdf",
                "recipient": "919876543210",
                "message": "PDF downloaded! Attach file in WhatsApp.",
                "whatsapp_url": "https://web.whatsapp.com/send?phone=919876543210&text=...",
                "download_url": "/api/v1/invoice/3f1c.../pdf"
            }
        }
