from .jobs import JobFilters, JobRepository, JobUpdate

__all__ = ["JobFilters", "JobRepository", "JobUpdate"]
