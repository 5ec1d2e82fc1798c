"""
Inshort Backend

Content management and publishing API for the Inshort news site.

Package Structure:
==================
    src/
    ├── api/        ← FastAPI application
    ├── worker/     ← Scheduled job runner
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn src.api.main:app --reload

    # Scheduled jobs
    python -m src.worker.job_runner publish_scheduled
"""
