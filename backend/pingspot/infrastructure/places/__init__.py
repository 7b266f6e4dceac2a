from .google_places_client import GooglePlacesNameClient

__all__ = ["GooglePlacesNameClient"]
