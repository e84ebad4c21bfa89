# FILE: backend/services/playlist_service.py
"""
Song playlist on top of the "songs" record set
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from backend.errors import BadRequestError, NotFoundError
from backend.services.record_store import RecordStore
from backend.services.upload_intake import UploadIntake

logger = logging.getLogger(__name__)

SONGS_RESOURCE = "songs"


class PlaylistService:
    """Upload, list and delete songs"""
    
    def __init__(self, record_store: RecordStore, upload_intake: UploadIntake):
        self.record_store = record_store
        self.upload_intake = upload_intake
    
    def list(self) -> List[Dict[str, Any]]:
        return self.record_store.read(SONGS_RESOURCE, [])
    
    async def add(self, upload: Optional[UploadFile], title: Optional[str] = None) -> Dict[str, Any]:
        """Store an audio upload and append it to the playlist"""
        stored = await self.upload_intake.save(upload, kind="audio")
        song = {
            "title": title or stored.original_name or "Unknown",
            "filename": stored.stored_filename,
            "url": stored.url
        }
        try:
            self.record_store.update(SONGS_RESOURCE, [], lambda songs: songs.append(song))
        except Exception:
            # Don't leave an orphaned file behind
            self.upload_intake.delete(stored.stored_filename)
            raise
        
        logger.info(f"Song uploaded: {song['filename']}")
        return song
    
    def delete(self, filename: str) -> Dict[str, Any]:
        """Remove a song by stored filename and delete its file"""
        filename = Path(filename or "").name
        if not filename:
            raise BadRequestError("Missing filename")
        
        def _remove(songs: List[Any]) -> Dict[str, Any]:
            for idx, song in enumerate(songs):
                if isinstance(song, dict) and song.get("filename") == filename:
                    return songs.pop(idx)
            raise NotFoundError("Song not found")
        
        song = self.record_store.update(SONGS_RESOURCE, [], _remove)
        self.upload_intake.delete(filename)
        
        logger.info(f"Song deleted: {filename}")
        return song
