from fastapi import FastAPI
from utils.metrics import setup_metrics
from config.lifespan import lifespan
from routes import base, analyze

# Initialize the FastAPI app with the lifespan manager
app = FastAPI(lifespan=lifespan)

# Setup Prometheus metrics
setup_metrics(app)

# Include all the application routers
app.include_router(base.base_router)
app.include_router(analyze.analyze_router)
