from schemas.profile import ContactInfoSchema, ProfileCreate

__all__ = [
    "ContactInfoSchema",
    "ProfileCreate",
]
