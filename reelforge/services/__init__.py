"""
Services.
"""
from .video_service import VideoService, get_video_service

__all__ = ["VideoService", "get_video_service"]
