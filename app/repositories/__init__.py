"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer for categories, products and
orders. Each repository extends BaseRepository and adds its own queries.
"""
