"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services validate input, take the row locks they depend on and call
repositories for writes. They raise coded ``AppError`` subclasses and leave
committing to the caller.
"""
