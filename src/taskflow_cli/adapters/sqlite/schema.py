"""Database schema definitions for the Taskflow SQLite store.

Tasks and projects are owned independently: ``tasks.project_id`` carries no
foreign key, so deleting a project never removes or silently rewrites
tasks. Detaching references is an explicit step of project deletion.
"""

from __future__ import annotations

# Users table - credential material stays in this table only
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE COLLATE NOCASE,
    name TEXT NOT NULL,
    timezone TEXT NOT NULL DEFAULT 'UTC',
    password_salt TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

# Sessions table - only a digest of each token is stored
CREATE_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS sessions (
    token_hash TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    expires_at DATETIME NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
)
"""

# Projects table
CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    color TEXT NOT NULL DEFAULT '#007bff',
    user_id TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
)
"""

# Tasks table - subtasks and tags are JSON arrays
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    completed BOOLEAN NOT NULL DEFAULT 0,
    priority TEXT DEFAULT 'Medium',
    due_date DATETIME,
    archived BOOLEAN NOT NULL DEFAULT 0,
    subtasks TEXT NOT NULL DEFAULT '[]',
    tags TEXT NOT NULL DEFAULT '[]',

    -- Legacy free-text project name, kept alongside the reference
    project TEXT,
    project_id TEXT,

    user_id TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
)
"""

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_user ON tasks(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_project ON tasks(user_id, project_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_due ON tasks(user_id, due_date)",
]

CREATE_PROJECT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_user ON projects(user_id)",
]

CREATE_SESSION_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_sessions_user ON sessions(user_id)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_SESSIONS_TABLE,
    CREATE_PROJECTS_TABLE,
    CREATE_TASKS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES + CREATE_PROJECT_INDEXES + CREATE_SESSION_INDEXES

# Columns callers may write through update_matching
TASK_COLUMNS = frozenset(
    {
        "title",
        "description",
        "completed",
        "priority",
        "due_date",
        "archived",
        "subtasks",
        "tags",
        "project",
        "project_id",
    }
)
PROJECT_COLUMNS = frozenset({"name", "description", "color"})
