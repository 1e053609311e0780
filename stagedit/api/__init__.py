"""stagedit API - FastAPI router for the editor host."""
from .router import api_router

__all__ = ['api_router']
