# app/services/identifiers.py
import uuid

def generate_token() -> str:
    """
    Return a fresh random (version 4) UUID in canonical text form.
    No counter is persisted, so tokens stay unique across restarts.
    """
    return str(uuid.uuid4())

def is_token(value: str) -> bool:
    try:
        return str(uuid.UUID(value)) == value
    except (TypeError, ValueError, AttributeError):
        return False
