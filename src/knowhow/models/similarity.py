"""Similarity lookup models (match output)."""

from typing import List, Optional

from pydantic import BaseModel, Field

from knowhow.models.case import RelatedPr


MAX_SIMILAR_CASES = 3


class SimilarCaseHit(BaseModel):
    """One known case the model judged similar to the new crash."""

    case_id: str = Field(description="Identifier of the known case")
    similarity_reason: str = Field(description="Why the cases are technically similar")
    related_pr: RelatedPr = Field(description="Pull request that fixed the known case")

    class Config:
        frozen = True


class SimilarCasesResult(BaseModel):
    """Hits ranked by the model, best first. Ranking is trusted as given."""

    similar_cases: List[SimilarCaseHit] = Field(
        description="Up to three similar cases, highest ranked first",
        max_length=MAX_SIMILAR_CASES
    )

    class Config:
        frozen = True

    @property
    def best(self) -> Optional[SimilarCaseHit]:
        """Highest ranked hit, or None when nothing matched."""
        return self.similar_cases[0] if self.similar_cases else None
