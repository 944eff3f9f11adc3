"""
OnboardHub Backend - onboarding checklists and resource libraries

Per-user onboarding checklists and job-story resource libraries organized
in versions, shareable through invite links that clone content into the
recipient's account.
"""

__version__ = "1.0.0"
