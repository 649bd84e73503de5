import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from careerboard.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- CAREER TAXONOMY
-- ============================================================
CREATE TABLE IF NOT EXISTS career_categories (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    slug        TEXT NOT NULL UNIQUE,
    description TEXT,
    icon        TEXT,
    color       TEXT,
    sort_order  INTEGER NOT NULL DEFAULT 0,
    is_active   INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS career_locations (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    slug        TEXT NOT NULL UNIQUE,
    city        TEXT,
    country     TEXT,
    is_remote   INTEGER NOT NULL DEFAULT 0,
    sort_order  INTEGER NOT NULL DEFAULT 0,
    is_active   INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS career_types (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    slug        TEXT NOT NULL UNIQUE,
    description TEXT,
    sort_order  INTEGER NOT NULL DEFAULT 0,
    is_active   INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE TABLE IF NOT EXISTS career_levels (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    slug        TEXT NOT NULL UNIQUE,
    description TEXT,
    years_min   INTEGER NOT NULL DEFAULT 0,
    years_max   INTEGER,
    sort_order  INTEGER NOT NULL DEFAULT 0,
    is_active   INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

-- ============================================================
-- POSITIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS career_positions (
    id                   TEXT PRIMARY KEY,
    category_id          TEXT REFERENCES career_categories(id) ON DELETE SET NULL,
    location_id          TEXT REFERENCES career_locations(id) ON DELETE SET NULL,
    type_id              TEXT REFERENCES career_types(id) ON DELETE SET NULL,
    level_id             TEXT REFERENCES career_levels(id) ON DELETE SET NULL,
    title                TEXT NOT NULL,
    slug                 TEXT NOT NULL UNIQUE,
    summary              TEXT,
    description          TEXT NOT NULL DEFAULT '',
    requirements         TEXT,
    benefits             TEXT,
    salary_min           INTEGER,
    salary_max           INTEGER,
    salary_currency      TEXT NOT NULL DEFAULT 'USD',
    salary_type          TEXT NOT NULL DEFAULT 'yearly',
    application_deadline TEXT,
    remote_allowed       INTEGER NOT NULL DEFAULT 0,
    featured             INTEGER NOT NULL DEFAULT 0,
    urgent               INTEGER NOT NULL DEFAULT 0,
    status               TEXT NOT NULL DEFAULT 'draft'
                         CHECK(status IN ('draft','open','closed','filled')),
    views_count          INTEGER NOT NULL DEFAULT 0,
    applications_count   INTEGER NOT NULL DEFAULT 0,
    is_active            INTEGER NOT NULL DEFAULT 1,
    published_at         TEXT,
    created_at           TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at           TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_positions_status ON career_positions(status);
CREATE INDEX IF NOT EXISTS idx_positions_category ON career_positions(category_id);

-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS career_applications (
    id               TEXT PRIMARY KEY,
    position_id      TEXT REFERENCES career_positions(id) ON DELETE SET NULL,
    first_name       TEXT NOT NULL,
    last_name        TEXT NOT NULL,
    email            TEXT NOT NULL,
    phone            TEXT,
    linkedin_url     TEXT,
    portfolio_url    TEXT,
    github_url       TEXT,
    cover_letter     TEXT,
    resume_url       TEXT,
    status           TEXT NOT NULL DEFAULT 'submitted'
                     CHECK(status IN ('submitted','reviewing','interview_scheduled',
                                      'interview_completed','offered','accepted',
                                      'rejected','withdrawn')),
    notes            TEXT,
    source           TEXT,
    applied_at       TEXT NOT NULL,
    last_activity_at TEXT NOT NULL,
    created_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_applications_status ON career_applications(status);
CREATE INDEX IF NOT EXISTS idx_applications_position ON career_applications(position_id);

CREATE TABLE IF NOT EXISTS career_application_activities (
    id             TEXT PRIMARY KEY,
    application_id TEXT NOT NULL REFERENCES career_applications(id) ON DELETE CASCADE,
    activity_type  TEXT NOT NULL,
    old_status     TEXT,
    new_status     TEXT,
    description    TEXT,
    notes          TEXT,
    created_at     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_activities_application ON career_application_activities(application_id);

-- ============================================================
-- PROJECTS
-- ============================================================
CREATE TABLE IF NOT EXISTS projects (
    id                TEXT PRIMARY KEY,
    name              TEXT NOT NULL,
    slug              TEXT NOT NULL UNIQUE,
    client_name       TEXT,
    short_description TEXT,
    description       TEXT,
    project_url       TEXT,
    status            TEXT NOT NULL DEFAULT 'planning'
                      CHECK(status IN ('planning','in-progress','completed','on-hold')),
    featured          INTEGER NOT NULL DEFAULT 0,
    views_count       INTEGER NOT NULL DEFAULT 0,
    budget            INTEGER,
    start_date        TEXT,
    end_date          TEXT,
    created_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at        TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_projects_status ON projects(status);

-- ============================================================
-- POSTS
-- ============================================================
CREATE TABLE IF NOT EXISTS posts (
    id           TEXT PRIMARY KEY,
    title        TEXT NOT NULL,
    slug         TEXT NOT NULL UNIQUE,
    excerpt      TEXT,
    content      TEXT,
    category     TEXT,
    author_name  TEXT,
    status       TEXT NOT NULL DEFAULT 'draft'
                 CHECK(status IN ('draft','published','archived')),
    featured     INTEGER NOT NULL DEFAULT 0,
    views_count  INTEGER NOT NULL DEFAULT 0,
    published_at TEXT,
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_posts_status ON posts(status);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
