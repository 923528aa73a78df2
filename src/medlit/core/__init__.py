"""MedLit core vocabularies, records and exceptions."""
