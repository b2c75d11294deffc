#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run against SQLite (in-memory or a temporary file) and need no
external services:

    python -m pytest tests/ -v

    # Skip the multi-threaded contention tests
    python -m pytest tests/ -v -m "not concurrency"
"""

import unittest
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.app_context import AppContext
from core.config_loader import AppConfig
from database.database import build_engine
from database.models import Base, Youth, Teacher, Course


def create_test_engine(url: str = "sqlite://"):
    """Engine with the schema created.

    In-memory databases share one connection across threads so every
    session sees the same data.
    """
    if url in ("sqlite://", "sqlite:///:memory:"):
        engine = build_engine(url, poolclass=StaticPool)
    else:
        engine = build_engine(url)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def add_youth(
    session_factory,
    youth_id: str,
    family_id: str = "F001",
    age: Optional[int] = 8,
    interest: Optional[str] = None,
    learning_style: Optional[str] = None,
    name: Optional[str] = None
):
    with session_factory() as session:
        session.add(Youth(
            youth_id=youth_id,
            family_id=family_id,
            name=name or f"Child {youth_id}",
            age=age,
            interest=interest,
            learning_style=learning_style,
        ))
        session.commit()


def add_teacher(
    session_factory,
    teacher_id: str,
    specialty: Optional[str] = None,
    teaching_style: Optional[str] = None,
    avg_score=None,
    name: Optional[str] = None,
    neighborhood_id: str = "N001"
):
    with session_factory() as session:
        session.add(Teacher(
            teacher_id=teacher_id,
            neighborhood_id=neighborhood_id,
            name=name or f"Teacher {teacher_id}",
            specialty=specialty,
            teaching_style=teaching_style,
            avg_score=Decimal(str(avg_score)) if avg_score is not None else None,
        ))
        session.commit()


def add_course(
    session_factory,
    course_id: str,
    capacity: int = 20,
    current_enrollment: int = 0,
    course_type: str = "art",
    age_range: Optional[str] = "7-10",
    teacher_id: Optional[str] = None,
    neighborhood_id: str = "N001",
    name: Optional[str] = None
):
    with session_factory() as session:
        session.add(Course(
            course_id=course_id,
            teacher_id=teacher_id,
            neighborhood_id=neighborhood_id,
            name=name or f"Course {course_id}",
            type=course_type,
            age_range=age_range,
            capacity=capacity,
            current_enrollment=current_enrollment,
        ))
        session.commit()


class ApiTestCase(unittest.TestCase):
    """Shared app/client setup with seeded directory data."""

    def setUp(self):
        from fastapi.testclient import TestClient
        from web.backend.app import app
        from web.backend.dependencies import get_app_context
        from web.backend.routers.enrollments import limiter

        # Disable rate limiting for tests
        limiter.enabled = False

        self.engine = create_test_engine()
        self.session_factory = create_session_factory(self.engine)
        self.ctx = AppContext.build(AppConfig(), session_factory=self.session_factory)
        self.ctx.parameter_store.seed_defaults()

        add_youth(self.session_factory, "Y001", family_id="F001", age=8, interest="piano,drawing", learning_style="visual")
        add_youth(self.session_factory, "Y002", family_id="F002", age=12, interest="chess")
        add_teacher(self.session_factory, "T001", specialty="piano,drawing", teaching_style="visual", avg_score=90)
        add_teacher(self.session_factory, "T002", specialty="chess", teaching_style="auditory", avg_score=70)
        add_course(self.session_factory, "C001", capacity=2, course_type="art", age_range="7-10", teacher_id="T001")
        add_course(self.session_factory, "SOLO", capacity=1, course_type="sports", age_range="11-13", teacher_id="T002")

        self.app = app
        self.app.dependency_overrides[get_app_context] = lambda: self.ctx
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def tearDown(self):
        self.app.dependency_overrides.clear()
        self.engine.dispose()

    def assertError(self, response, status_code, code):
        self.assertEqual(response.status_code, status_code, response.text)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["code"], code)
        return body
