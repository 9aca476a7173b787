from fastapi import APIRouter, status
from typing import List

from app.schemas import InternshipCreate, InternshipOut
from app.services import internship_service

router = APIRouter(tags=["internships"])


@router.get("/internships", response_model=List[InternshipOut])
@router.get("/api/internships", response_model=List[InternshipOut])
async def list_internships():
    return await internship_service.list_internships()


@router.post("/api/internships", response_model=InternshipOut, status_code=status.HTTP_201_CREATED)
async def create_internship(payload: InternshipCreate):
    return await internship_service.create_internship(payload)
