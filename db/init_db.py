"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

# Foreign keys restrict deletes; repositories remove dependants explicitly.
SCHEMA_SQL = """
-- Users table: registered athletes; user_password holds a hash, never plain text
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    email           VARCHAR(254) UNIQUE NOT NULL,
    user_password   TEXT NOT NULL,
    first_name      VARCHAR(50) NOT NULL,
    last_name       VARCHAR(50) NOT NULL,
    is_admin        BOOLEAN NOT NULL DEFAULT FALSE,
    user_status     VARCHAR(20) NOT NULL DEFAULT 'active'
                    CHECK (user_status IN ('active', 'pending', 'blocked')),
    image_url       TEXT,
    bio             TEXT,
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP
);

-- Families table: groups of users who share postings and results
CREATE TABLE IF NOT EXISTS families (
    id              SERIAL PRIMARY KEY,
    family_name     VARCHAR(100) NOT NULL,
    join_code       VARCHAR(20) UNIQUE,
    image_url       TEXT,
    bio             TEXT,
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP
);

-- Memberships: one row per (user, family) pair
CREATE TABLE IF NOT EXISTS users_families (
    user_id         INTEGER NOT NULL REFERENCES users(id),
    family_id       INTEGER NOT NULL REFERENCES families(id),
    mem_status      VARCHAR(20) NOT NULL DEFAULT 'active'
                    CHECK (mem_status IN ('active', 'pending', 'inactive')),
    is_admin        BOOLEAN NOT NULL DEFAULT FALSE,
    primary_family  BOOLEAN NOT NULL DEFAULT FALSE,
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP,
    PRIMARY KEY (user_id, family_id)
);

-- Movements: exercises a workout can be tagged with
CREATE TABLE IF NOT EXISTS movements (
    id              SERIAL PRIMARY KEY,
    movement_name   VARCHAR(100) NOT NULL,
    youtube_id      VARCHAR(50)
);

-- Workouts: library of workouts, featured or user-created
CREATE TABLE IF NOT EXISTS workouts (
    id              SERIAL PRIMARY KEY,
    sw_id           VARCHAR(50),
    wo_name         VARCHAR(100) NOT NULL,
    wo_description  TEXT,
    category        VARCHAR(20) NOT NULL DEFAULT 'custom'
                    CHECK (category IN ('wod', 'featured', 'girls', 'heroes', 'games', 'custom')),
    score_type      VARCHAR(20),
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP,
    featured_date   TIMESTAMP,
    create_by       INTEGER REFERENCES users(id)
);

CREATE TABLE IF NOT EXISTS workouts_movements (
    wo_id           INTEGER NOT NULL REFERENCES workouts(id),
    movement_id     INTEGER NOT NULL REFERENCES movements(id),
    PRIMARY KEY (wo_id, movement_id)
);

-- Postings: a workout assigned to a family for a given day
CREATE TABLE IF NOT EXISTS postings (
    id              SERIAL PRIMARY KEY,
    family_id       INTEGER NOT NULL REFERENCES families(id),
    wo_id           INTEGER NOT NULL REFERENCES workouts(id),
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP,
    post_date       TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    post_by         INTEGER REFERENCES users(id)
);

-- Results: a user's score for a workout within a family
CREATE TABLE IF NOT EXISTS results (
    id              SERIAL PRIMARY KEY,
    user_id         INTEGER NOT NULL REFERENCES users(id),
    family_id       INTEGER NOT NULL REFERENCES families(id),
    workout_id      INTEGER NOT NULL REFERENCES workouts(id),
    score           TEXT,
    notes           TEXT,
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP,
    complete_date   TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Comments: remarks left on a result
CREATE TABLE IF NOT EXISTS comments (
    id              SERIAL PRIMARY KEY,
    result_id       INTEGER NOT NULL REFERENCES results(id),
    user_id         INTEGER NOT NULL REFERENCES users(id),
    content         TEXT NOT NULL,
    create_date     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_date     TIMESTAMP
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_users_families_family ON users_families(family_id);
CREATE INDEX IF NOT EXISTS idx_workouts_movements_movement ON workouts_movements(movement_id);
CREATE INDEX IF NOT EXISTS idx_postings_family_date ON postings(family_id, post_date);
CREATE INDEX IF NOT EXISTS idx_results_family_workout ON results(family_id, workout_id);
CREATE INDEX IF NOT EXISTS idx_results_user ON results(user_id);
CREATE INDEX IF NOT EXISTS idx_comments_result ON comments(result_id);
"""

DROP_SQL = """
DROP TABLE IF EXISTS comments, results, postings, workouts_movements,
    workouts, movements, users_families, families, users;
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


def drop_tables() -> None:
    """Drop every table. Used by the integration test suite."""
    _run(DROP_SQL)
    logger.info("Database schema dropped.")


def _run(sql: str) -> None:
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to run schema SQL: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
