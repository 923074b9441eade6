"""Domain exceptions raised by ports and translated by use cases"""


class AllocationConflictError(Exception):
    """Counter transaction aborted; no number was consumed, safe to retry"""

    def __init__(self, sequence_name: str, reason: str = ""):
        self.sequence_name = sequence_name
        self.reason = reason
        super().__init__(f"Could not allocate next value for sequence '{sequence_name}': {reason}")


class DuplicateIssuanceError(Exception):
    """An invoice already exists for the order"""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Invoice already issued for order {order_id}")


class DownstreamServiceError(Exception):
    """PDF rendering, e-mail delivery or address lookup failed"""

    def __init__(self, service: str, reason: str):
        self.service = service
        self.reason = reason
        super().__init__(f"{service} failed: {reason}")
