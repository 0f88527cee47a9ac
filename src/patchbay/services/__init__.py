"""Service layer — business logic returning ServiceResult.

Services may import from domain, core components and infrastructure.
They must never import from commands or output.
"""
