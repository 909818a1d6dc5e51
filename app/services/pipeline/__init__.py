"""
Interview Generation Pipeline Package

Architecture:
- interview_generator.py: Request validation, prompt building, orchestration
- llm_service.py: Single model call with per-call correlation ID
- llm_parser.py: Response sanitizing and question schema checks
- file_validator.py: Resume upload validation
"""

from .interview_generator import InterviewGenerator
from .file_validator import FileValidator
from .llm_service import LLMService
from .llm_parser import parse_question_set, sanitize_and_parse

__all__ = [
    'InterviewGenerator',
    'FileValidator',
    'LLMService',
    'parse_question_set',
    'sanitize_and_parse',
]
