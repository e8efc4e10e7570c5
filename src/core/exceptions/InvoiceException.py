from fastapi import HTTPException

class InvoiceNotFoundException(HTTPException):
    def __init__(self, message: str = "Invoice not found"):
        super().__init__(status_code=404, detail=message)


class SubmissionInProgressException(HTTPException):
    def __init__(self, message: str = "Invoice is already being saved"):
        super().__init__(status_code=409, detail=message)


class DraftStateException(HTTPException):
    def __init__(self, message: str = "Invalid change to the invoice form"):
        super().__init__(status_code=400, detail=message)
