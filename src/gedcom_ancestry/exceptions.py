class GedcomAncestryError(Exception):
    """Base exception for gedcom_ancestry failures."""


class ReportingError(GedcomAncestryError):
    """Raised when the model is inconsistent while rendering one person."""

    def __init__(self, person_id: int, message: str):
        super().__init__(message)
        self.person_id = person_id
        self.message = message
