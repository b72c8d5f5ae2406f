"""Infrastructure modules for the event and notification pipeline.

Centralized infrastructure components:
- configuration: Settings management (Settings, EventSettings, HttpSettings, ...)
- logging: structlog setup and context binding (get_module_logger, bind_log_context)
- exceptions: Pipeline error taxonomy
- events: Domain events and the EventDispatcher
- http: Auth strategies, retry policy and HttpClient
- notifications: NotificationService and email/SMS/push channels
- operations: Per-call operation results and HTTP outcome classification
- hookspecs: pluggy hook specifications
- services: Cached providers (get_settings, get_event_dispatcher, ...)
"""
