import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import config, configure_logging
from database import engine, Base
from routers import auth, rides, bookings, ride_requests, location, notifications

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready at %s (simulated latency %s)", config.DATABASE_URL,
                "on" if config.SIMULATE_LATENCY else "off")
    yield
    await engine.dispose()

app = FastAPI(title="UniNoah Campus Rides", lifespan=lifespan)

# The mobile client runs on Expo, both native and web
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(rides.router)
app.include_router(bookings.router)
app.include_router(ride_requests.router)
app.include_router(location.router)
app.include_router(notifications.router)

@app.get("/")
def read_root():
    return {"message": "Welcome to UniNoah Campus Rides"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
