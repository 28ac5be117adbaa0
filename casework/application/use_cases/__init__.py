"""Read use cases composed from the workflow services."""

from casework.application.use_cases.get_case_checklist import GetCaseChecklistUseCase

__all__ = ["GetCaseChecklistUseCase"]
