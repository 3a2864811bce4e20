"""
Run script to start the FastAPI server (no reload).
"""
import uvicorn


def main():
    """Start the Uvicorn server."""
    print("Starting LittleSteps Forecaster API...")
    print("API Documentation: http://localhost:8000/docs")
    print("-" * 50)
    
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
