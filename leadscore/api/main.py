"""FastAPI application setup."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadscore import __version__
from .routes import router

# Create FastAPI app
app = FastAPI(
    title="Lead Scoring Engine",
    description="Score, filter and rank company records against weighted criteria",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# Include API routes
app.include_router(router, prefix="/api")
