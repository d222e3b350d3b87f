"""Entity mutation reporting use case."""

from app.application.use_cases.mutations.report_mutation import ReportMutationService

__all__ = ["ReportMutationService"]
