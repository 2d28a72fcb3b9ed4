import uvicorn

from callpulse.core.config import settings

def main():
    """
    Run the FastAPI application using uvicorn
    """
    uvicorn.run(
        "callpulse.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )

if __name__ == "__main__":
    main()
