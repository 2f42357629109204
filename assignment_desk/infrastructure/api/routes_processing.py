"""Processing endpoints — ingest CSV data."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from assignment_desk.config import settings
from assignment_desk.tools.seed_db import seed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/process", tags=["processing"])


@router.post("/ingest")
async def ingest_csv(drop: bool = False):
    """Load CSV data from the configured directory into the database."""
    data_dir = Path(settings.csv_data_path)
    if not data_dir.exists():
        raise HTTPException(status_code=400, detail=f"Data directory not found: {data_dir}")

    try:
        counts = await seed(data_dir, drop=drop)
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SQLAlchemyError, ValueError) as e:
        logger.exception("Error ingesting CSV data")
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "status": "ok",
        "message": "CSV data ingested successfully",
        "counts": counts,
        "drop": drop,
    }
