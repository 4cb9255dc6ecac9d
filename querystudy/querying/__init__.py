"""쿼리 조합 패키지 — 동적 조건, 쿼리 명세, DTO 프로젝션.

Query composition package.
Reusable building blocks shared by the repositories: optional predicate
composition (conditions), the immutable query specification (spec),
and DTO projections (projections).
"""
