#!/usr/bin/env python3
"""
In-memory stores, optionally seeded from a YAML file.

Seed file layout:
    profiles:
      - candidate_id: user-1
        profile_id: profile-1
        certifications: [BLS, ACLS]
        ...
    jobs:
      - id: job-1
        title: ICU Nurse
        status: active
        ...
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml

from core.scorer.models import CandidateProfile, JobPosting
from stores.base import JobStore, ProfileStore

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "active"


class InMemoryProfileStore(ProfileStore):
    def __init__(self, profiles: Optional[Iterable[CandidateProfile]] = None):
        self._lock = threading.Lock()
        self._by_candidate: Dict[str, CandidateProfile] = {}
        self._by_profile: Dict[str, CandidateProfile] = {}
        for profile in profiles or []:
            self.add(profile)

    def add(self, profile: CandidateProfile) -> None:
        with self._lock:
            self._by_candidate[profile.candidate_id] = profile
            if profile.profile_id:
                self._by_profile[profile.profile_id] = profile

    def get_by_candidate_id(self, candidate_id: str) -> Optional[CandidateProfile]:
        with self._lock:
            return self._by_candidate.get(candidate_id)

    def get_by_profile_id(self, profile_id: str) -> Optional[CandidateProfile]:
        with self._lock:
            return self._by_profile.get(profile_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_candidate)


class InMemoryJobStore(JobStore):
    """Jobs keyed by id; only postings whose status is 'active' are listed."""

    def __init__(self, jobs: Optional[Iterable[Union[JobPosting, Tuple[JobPosting, str]]]] = None):
        self._lock = threading.Lock()
        self._jobs: Dict[str, Tuple[JobPosting, str]] = {}
        for entry in jobs or []:
            if isinstance(entry, tuple):
                self.add(*entry)
            else:
                self.add(entry)

    def add(self, job: JobPosting, status: str = ACTIVE_STATUS) -> None:
        with self._lock:
            self._jobs[job.id] = (job, (status or ACTIVE_STATUS).strip().lower())

    def set_status(self, job_id: str, status: str) -> None:
        with self._lock:
            job, _ = self._jobs[job_id]
            self._jobs[job_id] = (job, status.strip().lower())

    def list_active(self) -> List[JobPosting]:
        with self._lock:
            return [job for job, status in self._jobs.values() if status == ACTIVE_STATUS]

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


def _records(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list):
        raise ValueError(f"Seed data '{key}' must be a list")
    return [r for r in records if isinstance(r, dict)]


def load_seed_data(path: Union[str, Path]) -> Tuple[InMemoryProfileStore, InMemoryJobStore]:
    """
    Build in-memory stores from a YAML seed file.

    Records that cannot be parsed (e.g. a job without an id) are skipped
    with a warning.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the top level is not a mapping
    """
    path = Path(path)
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Seed data in {path} must be a mapping")

    profile_store = InMemoryProfileStore()
    for record in _records(data, 'profiles'):
        profile = CandidateProfile.from_dict(record)
        if not profile.candidate_id:
            logger.warning(f"Skipping profile without candidate_id in {path}")
            continue
        profile_store.add(profile)

    job_store = InMemoryJobStore()
    for record in _records(data, 'jobs'):
        if record.get('id') in (None, ''):
            logger.warning(f"Skipping job without id in {path}")
            continue
        job = JobPosting.from_dict(record)
        job_store.add(job, str(record.get('status') or ACTIVE_STATUS))

    logger.info(f"Loaded {len(profile_store)} profiles and {len(job_store)} jobs from {path}")
    return profile_store, job_store
