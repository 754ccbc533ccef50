"""
Recruit CRM Backend.

Core components:
- db: Tables, enums and session management
- stores: Company, Contact, sub-entity and field definition stores
- api: FastAPI application and routes
"""
