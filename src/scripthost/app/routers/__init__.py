from scripthost.app.routers.modules import router as modules_router

__all__ = ["modules_router"]
