# main.py
from fastapi.middleware.cors import CORSMiddleware
import os
from dotenv import load_dotenv

from fastapi import Depends, FastAPI
from api import users, water, leaderboard, notification_preferences
from api.deps import get_store
from services.hydration_store import HydrationStore
from services.supabase_service import SupabaseService
from services.weather_service import WeatherService

# Load environment variables
load_dotenv()

# Initialize FastAPI app
app = FastAPI(
    title="Hydration Backend",
    description="Daily water intake tracking with weather-adjusted goals, streaks and a leaderboard",
    version="1.0.0"
)

# Add CORS middleware for the mobile app
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services on startup
@app.on_event("startup")
async def startup_event():
    """Build the store and weather clients shared by all requests"""
    print("🚀 Starting Hydration Backend...")

    try:
        app.state.store = SupabaseService()
        print("✅ Supabase service initialized")

        app.state.weather_service = WeatherService()
        print("✅ Weather service initialized")

        print("🎉 Backend startup complete!")

    except Exception as e:
        print(f"❌ Error during startup: {e}")
        raise

# Include API routers
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(water.router, prefix="/api/water", tags=["water"])
app.include_router(leaderboard.router, prefix="/api")
app.include_router(notification_preferences.router, prefix="/api")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Hydration Backend API",
        "version": "1.0.0",
        "status": "running",
        "features": ["daily_goals", "water_intake", "streaks", "history", "leaderboard"]
    }

# Health check endpoint
@app.get("/health")
async def health_check(store: HydrationStore = Depends(get_store)):
    try:
        store_health = await store.health_check()

        return {
            "status": store_health["status"],
            "services": {
                "api": "healthy",
                "store": store_health
            },
            "message": "All services are running" if store_health["status"] == "healthy" else "Some services are down"
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "message": "Some services are down"
        }

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
