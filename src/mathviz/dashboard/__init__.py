"""Dash dashboard hosting the syllabus sidebar and module views."""
