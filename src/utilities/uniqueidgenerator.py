import uuid


class UniqueIdGenerator:
    @staticmethod
    def generate_invoice_id() -> str:
        """
        Generate the opaque store id for a new invoice row.
        """
        return str(uuid.uuid4())

    @staticmethod
    def generate_stop_id() -> str:
        """
        Generate the stable identifier of a route stop.
        """
        return str(uuid.uuid4())
