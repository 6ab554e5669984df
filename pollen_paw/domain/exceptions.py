"""
Domain exceptions.

``SymptomValidationError`` subclasses ``ValueError`` so the global error
middleware reports it as a 400.
"""


class SymptomValidationError(ValueError):
    """A symptom axis score is outside the accepted 1-5 range."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be between 1 and 5")


class PetNotFoundError(LookupError):
    """No pet exists with the requested id."""

    def __init__(self, pet_id: int):
        self.pet_id = pet_id
        super().__init__(f"Pet {pet_id} not found")


class SymptomLogNotFoundError(LookupError):
    """No symptom log exists with the requested id."""

    def __init__(self, log_id: int):
        self.log_id = log_id
        super().__init__(f"Symptom log {log_id} not found")


class LocationNotFoundError(LookupError):
    """The geocoder could not resolve a postal code."""

    def __init__(self, zip_code: str):
        self.zip_code = zip_code
        super().__init__(f"Could not find location for ZIP code '{zip_code}'")
