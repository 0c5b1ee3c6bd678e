"""Validation and transformation passes over a source file's top-level statements."""