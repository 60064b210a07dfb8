# Services package init
"""
Pocket Writer Backend — Services Layer
=======================================

What:  Business logic layer sitting between routes (HTTP) and the database.
How:   Services receive the per-request AsyncSession, apply business rules
       and return pydantic response models.

Service Inventory:
    - TemplateService: create / list / fetch templates
    - ArticleService:  create / feed / fetch articles (validates template refs)
    - json_payload:    JSON well-formedness check for payload columns
    - sorting:         sortBy / sortDir → ORDER BY translation
    - network_service: the server's own addresses, free-port search
    - seed_service:    starter content on first startup
"""
