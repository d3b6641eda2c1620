from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models import Application
from schemas.application import AverageLoanAmountResponse

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("/average-loan-amount", response_model=AverageLoanAmountResponse)
async def average_loan_amount(db: AsyncSession = Depends(get_db)):
    average = await Application.get_average_loan_amount(db)
    return AverageLoanAmountResponse(average_loan_amount=average)
