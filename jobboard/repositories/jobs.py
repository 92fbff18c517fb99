"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
- Embedding the owning company when a single job is fetched.

Non-Responsibilities:
- No payload validation (callers validate before calling in).
- No retries, no caching: every call is a fresh round-trip to the store.

Store failures are rolled back and re-raised unchanged.
"""

from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from ..database import Company, Job
from ..errors import BadRequestError, NotFoundError
from ..logger import StructuredLogger, get_logger
from ..sql import sql_for_partial_update

JOB_COLUMNS = (Job.id, Job.title, Job.salary, Job.equity, Job.company_handle)
COMPANY_COLUMNS = (
    Company.handle,
    Company.name,
    Company.description,
    Company.num_employees,
    Company.logo_url,
)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def _unknown_keys(data: Mapping[str, Any], cls) -> List[str]:
    allowed = {f.name for f in fields(cls)}
    return sorted(k for k in data if k not in allowed)


@dataclass
class JobFilters:
    """
    Optional search filters for find_all.

    min_salary: inclusive lower bound on salary (None or 0 means no bound)
    has_equity: only True restricts to jobs with equity > 0
    title: case-insensitive substring of the title
    """

    min_salary: Optional[int] = None
    has_equity: Any = None
    title: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JobFilters":
        unknown = _unknown_keys(data, cls)
        if unknown:
            raise BadRequestError(f"Unknown filter(s): {', '.join(unknown)}")
        return cls(**data)


@dataclass
class JobUpdate:
    """Fields a partial update may change. Unset fields are left alone."""

    title: Any = UNSET
    salary: Any = UNSET
    equity: Any = UNSET

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JobUpdate":
        unknown = _unknown_keys(data, cls)
        if unknown:
            raise BadRequestError(f"Cannot update field(s): {', '.join(unknown)}")
        return cls(**data)

    def changes(self) -> Dict[str, Any]:
        """Supplied fields only; an explicit None is a change to NULL."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


class JobRepository:
    """Data access for jobs, bound to one SQLAlchemy session."""

    def __init__(self, session, logger: Optional[StructuredLogger] = None):
        self.session = session
        # Building a repository never creates log files on its own
        self.logger = logger or get_logger(enable_file=False)

    @contextmanager
    def _round_trip(self, operation: str, write: bool = False) -> Iterator[None]:
        self.logger.record_query(operation, write=write)
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            self.logger.record_failure(type(e).__name__)
            self.logger.error(f"Job {operation} failed", error=str(e))
            raise

    def _not_found(self, operation: str, job_id: Any) -> NotFoundError:
        self.logger.record_not_found()
        self.logger.warning("Job not found", operation=operation, id=job_id)
        return NotFoundError(f"No job: {job_id}", identifier=job_id)

    def _fetch_job(self, operation: str, job_id: int) -> Optional[Dict[str, Any]]:
        with self._round_trip(operation):
            row = self.session.query(*JOB_COLUMNS).filter(Job.id == job_id).first()
        return dict(row._mapping) if row is not None else None

    def create(
        self,
        title: str,
        salary: Optional[int],
        equity: Any,
        company_handle: str,
    ) -> Dict[str, Any]:
        """
        Insert a job and return it with its generated id.

        Returns:
            {id, title, salary, equity, company_handle}
        """
        job = Job(
            title=title,
            salary=salary,
            equity=equity,
            company_handle=company_handle,
        )
        with self._round_trip("create", write=True):
            self.session.add(job)
            self.session.commit()
            self.session.refresh(job)

        self.logger.info("Job created", id=job.id, company_handle=company_handle)
        return {
            "id": job.id,
            "title": job.title,
            "salary": job.salary,
            "equity": job.equity,
            "company_handle": job.company_handle,
        }

    def find_all(
        self,
        filters: Union[JobFilters, Mapping[str, Any], None] = None,
    ) -> List[Dict[str, Any]]:
        """
        List jobs matching every filter given, ordered by title.

        Returns:
            [{id, title, salary, equity, company_handle, company_name}, ...]
        """
        if filters is None:
            filters = JobFilters()
        elif not isinstance(filters, JobFilters):
            filters = JobFilters.from_mapping(filters)

        predicates = []
        if filters.min_salary:
            predicates.append(Job.salary >= filters.min_salary)
        if filters.has_equity is True:
            predicates.append(Job.equity > 0)
        if filters.title:
            predicates.append(Job.title.icontains(filters.title, autoescape=True))

        query = (
            self.session.query(*JOB_COLUMNS, Company.name.label("company_name"))
            .outerjoin(Company, Job.company_handle == Company.handle)
            .filter(*predicates)
            .order_by(Job.title, Job.id)
        )
        self.logger.debug("Listing jobs", filters=len(predicates))

        with self._round_trip("find_all"):
            rows = query.all()
        return [dict(row._mapping) for row in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        """
        Fetch one job with its company embedded.

        Returns:
            {id, title, salary, equity, company}
            where company is {handle, name, description, num_employees, logo_url}

        Raises:
            NotFoundError: if no job has this id
        """
        job = self._fetch_job("get", job_id)
        if job is None:
            raise self._not_found("get", job_id)

        handle = job.pop("company_handle")
        with self._round_trip("get"):
            row = (
                self.session.query(*COMPANY_COLUMNS)
                .filter(Company.handle == handle)
                .first()
            )
        job["company"] = dict(row._mapping) if row is not None else None
        return job

    def update(
        self,
        job_id: int,
        data: Union[JobUpdate, Mapping[str, Any]],
    ) -> Dict[str, Any]:
        """
        Partially update a job: only the supplied fields change.

        Data can include: {title, salary, equity}

        Returns:
            {id, title, salary, equity, company_handle}

        Raises:
            BadRequestError: if data is empty or names other fields
            NotFoundError: if no job has this id
        """
        if not isinstance(data, JobUpdate):
            data = JobUpdate.from_mapping(data)
        partial = sql_for_partial_update(data.changes())
        self.logger.debug("Updating job", id=job_id, set_cols=partial.set_cols)

        with self._round_trip("update", write=True):
            matched = (
                self.session.query(Job)
                .filter(Job.id == job_id)
                .update(partial.as_dict(), synchronize_session=False)
            )
            self.session.commit()
        if not matched:
            raise self._not_found("update", job_id)

        job = self._fetch_job("update", job_id)
        if job is None:
            raise self._not_found("update", job_id)
        return job

    def remove(self, job_id: int) -> None:
        """
        Delete a job.

        Raises:
            NotFoundError: if no job has this id
        """
        with self._round_trip("remove", write=True):
            deleted = (
                self.session.query(Job)
                .filter(Job.id == job_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        if not deleted:
            raise self._not_found("remove", job_id)
        self.logger.info("Job removed", id=job_id)
