from fastapi import FastAPI

from metro_booking.config import settings
from metro_booking.logging_config import setup_logging
from metro_booking.routes.router import router as routes_router
from metro_booking.bookings.router import router as bookings_router

def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Metro route planning, train selection and fares",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.include_router(
        routes_router,
        prefix=f"{settings.API_V1_STR}/routes",
        tags=["Route Planning"]
    )

    app.include_router(
        bookings_router,
        prefix=f"{settings.API_V1_STR}/journeys",
        tags=["Journeys"]
    )

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
