from hostel_manager.models.communication.communication import Feedback, Notice

__all__ = ["Feedback", "Notice"]
