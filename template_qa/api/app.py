"""
Template QA - FastAPI Backend
REST API for template validation, quality scoring, previews and policy rules.

Run: uvicorn template_qa.api.app:app --reload --port 8000
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from template_qa import __version__, config
from template_qa.api.routers import policy, templates
from template_qa.logging_config import setup_logging

setup_logging(config.LOG_LEVEL, config.LOG_FORMAT, config.LOG_FILE)

app = FastAPI(
    title="Template QA",
    description="Validation and quality scoring for WhatsApp message templates.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── ROUTERS ─────────────────────────────────────────────────
app.include_router(templates.router)
app.include_router(policy.router)


@app.get("/api/health")
def health():
    return {"status": "healthy", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
