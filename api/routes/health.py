from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from db.session import check_db_connection, get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    if check_db_connection(db):
        return {"status": "ok", "database": "up"}
    return JSONResponse(status_code=503, content={"status": "degraded", "database": "down"})


@router.get("/")
def root():
    return {"message": "Project Management System API is running!"}
