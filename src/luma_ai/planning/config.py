"""Configuration constants for planning functionality."""

import os

# Capacity tables
# AI-backed flow: hard cap on the number of tasks
CAPACITY_MAX_TASKS = {"light": 3, "medium": 5, "full": 7}
# Deterministic flow: base visible count, one extra allowed by override
ITEM_CAPACITY_BASE = {"low": 1, "medium": 3, "high": 5}
ITEM_OVERRIDE_STEP = 1

# Compression
COMPRESSION_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048
MIN_BRAIN_DUMP_LENGTH = 10
MAX_BRAIN_DUMP_LENGTH = 2000

# Scheduling
DEFAULT_BREAK_DURATION = 15  # minutes
DEFAULT_MAX_CONSECUTIVE_TASKS = 3
ULTRADIAN_CYCLE_MINUTES = 90
TRANSITION_MINUTES = 10  # task switching cost between tasks
TIME_BLINDNESS_BUFFER = 1.25
DEFAULT_CATEGORY_DURATIONS = {
    "work": 60,
    "personal": 30,
    "care": 45,
    "routine": 15,
}
FALLBACK_TASK_DURATION = 30

# Nudge windows, half-open [start, start + NUDGE_WINDOW_MINUTES)
NUDGE_WINDOW_MINUTES = 5
FOCUS_NUDGE_MINUTES = 90
FOCUS_STRONG_NUDGE_MINUTES = 120
BREAK_REMINDER_MINUTES = 60
COMPLETION_CELEBRATION_INTERVAL = 3

# LLM Configuration
DEFAULT_OLLAMA_MODEL = "llama3.2:3b"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_TIMEOUT: float | None = None  # seconds, None waits forever

# Storage Configuration
DEFAULT_DATABASE_PATH = os.path.expanduser("~/.luma-ai/sessions.db")
DEFAULT_WAL_MODE = True

# MCP Server Configuration
DEFAULT_MCP_HOST = "localhost"
DEFAULT_MCP_PORT = 3000
DEFAULT_MCP_SERVER_NAME = "luma-ai-planner"

# Database Schema Version
SCHEMA_VERSION = 1
