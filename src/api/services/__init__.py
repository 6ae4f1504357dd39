# This file marks the services package for API business logic modules.
# It exists so routers can depend on cohesive service classes instead of raw worksheet access.
# Service modules isolate row-store logic and role checks from transport concerns.
