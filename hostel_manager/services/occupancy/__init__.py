from hostel_manager.services.occupancy.occupancy_service import (
    ALLOWED_TRANSITIONS,
    OccupancyService,
    is_transition_allowed,
)

__all__ = ["OccupancyService", "ALLOWED_TRANSITIONS", "is_transition_allowed"]
