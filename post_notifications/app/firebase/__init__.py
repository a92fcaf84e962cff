from .firebase import FirebaseServices, get_firebase

__all__ = ["FirebaseServices", "get_firebase"]
