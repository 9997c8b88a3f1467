"""
Core infrastructure shared by the project's apps.

Modules:
    models: BaseModel (timestamps) and UUIDPrimaryKeyMixin
    exceptions: application exception hierarchy with error codes
    services: ServiceResult and BaseService
    decorators: translate_database_errors

Nothing in this package knows about messages, favorites or channels.
"""
