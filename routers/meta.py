from fastapi import APIRouter

from schemas.common import ok
from services.grading import (
    GRADE_DESCRIPTIONS,
    GRADE_MARK_RANGES,
    GRADE_POINTS,
    Grade,
    Scale,
    weight_rationale,
    year_weights,
)

router = APIRouter(prefix="/meta", tags=["Meta"])


@router.get("/grade-scale")
def grade_scale():
    weights = year_weights(4)
    return ok({
        "grades": [
            {
                "grade": g.value,
                "description": GRADE_DESCRIPTIONS[g],
                "marks": GRADE_MARK_RANGES[g],
                "points_10": GRADE_POINTS[Scale.TEN][g],
                "points_4": GRADE_POINTS[Scale.FOUR][g],
            }
            for g in Grade
        ],
        "dgpa_weights_4_years": weights,
        "dgpa_weight_rationale": [weight_rationale(w) for w in weights],
    })
