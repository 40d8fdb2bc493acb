"""Service layer.

Submodules are imported explicitly (``from petadopt.services import
pet_service``); ``petadopt.services.errors`` is imported by ``core`` and must
not pull the services in with it.
"""
