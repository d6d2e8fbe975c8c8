from hostel_manager.services.file.logo_service import LOGO_OBJECT_NAME, LogoService, detect_image_type

__all__ = ["LogoService", "LOGO_OBJECT_NAME", "detect_image_type"]
