"""
Job Board
Recruiters post jobs, jobseekers apply, admins moderate.

Architecture:
- FastAPI: REST API with cookie sessions
- MongoDB: users, jobs, applications, sessions
"""

__version__ = "1.0.0"
