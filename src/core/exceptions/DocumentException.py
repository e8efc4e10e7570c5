from fastapi import HTTPException


class DocumentExportException(HTTPException):
    def __init__(self, detail: str = "Could not generate the invoice PDF. Please try again."):
        super().__init__(status_code=500, detail=detail)


class ExportInProgressException(HTTPException):
    def __init__(self, invoice_number: str):
        super().__init__(
            status_code=409,
            detail=f"Invoice #{invoice_number} is already being generated"
        )
