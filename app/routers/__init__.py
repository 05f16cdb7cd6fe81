from app.routers.quote_profile import router as quote_profile_router

__all__ = ["quote_profile_router"]
