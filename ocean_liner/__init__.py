"""
Ocean Liner Emergencies

Core modules:
- liner: the ship (publisher) that raises emergencies and collects results
- services: on-board services (subscribers) that handle emergencies
- multicast: ordered handler list with add/remove registration
- reporting: helpers for rebuilding console text from recorded events (no behavior changes)
"""
