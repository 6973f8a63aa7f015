"""
Internship Registry
REST backend for university internship records.

Architecture:
- MySQL or PostgreSQL behind one connection adapter (DB_TYPE selects)
- CRUD endpoints for contacts, companies, supervisors, students, programs, internships
- Spreadsheet import that get-or-creates the related rows in one transaction
"""

__version__ = "1.0.0"
