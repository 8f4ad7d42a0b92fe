"""
Play Store Domain Layer

Records, enumerations, error taxonomy and repository port.
All domain objects are immutable (frozen dataclasses) with ZERO external dependencies.
"""
