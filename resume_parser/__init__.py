"""
Resume Parser - Resume parsing, job search and application tracking

This application:
1. Decodes PDF, DOCX, DOC and plain-text resumes into text
2. Extracts name, email, phone, skills, experience, education and summary
3. Optionally uses Claude for extraction, falling back to heuristics
4. Searches job postings with typo-tolerant fuzzy matching
5. Scores jobs against a parsed resume's skills
6. Tracks applications and saved jobs
"""

__version__ = "1.0.0"
__author__ = "Resume Parser"
