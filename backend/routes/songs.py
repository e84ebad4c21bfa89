# FILE: backend/routes/songs.py
"""
Playlist endpoints
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from backend.dependencies import get_playlist_service
from backend.services.playlist_service import PlaylistService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/songs")
async def list_songs(service: PlaylistService = Depends(get_playlist_service)):
    """All songs in upload order"""
    return service.list()


@router.post("/upload-song")
async def upload_song(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    service: PlaylistService = Depends(get_playlist_service)
):
    """Upload an audio file and add it to the playlist"""
    song = await service.add(file, title=title)
    
    return {
        "message": "Song uploaded",
        "song": song
    }


@router.delete("/songs/{filename}")
async def delete_song(
    filename: str,
    service: PlaylistService = Depends(get_playlist_service)
):
    """Remove a song and its file"""
    song = service.delete(filename)
    
    return {
        "message": "Song deleted",
        "song": song
    }
