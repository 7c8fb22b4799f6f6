"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
product_service and order_service orchestrate the catalog rules and call
repositories for DB operations; storage_service mirrors product images.
"""
