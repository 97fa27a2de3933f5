"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Each repository extends BaseRepository and adds the locking reads and
guarded updates its service needs. Repositories flush; they never commit.
"""
