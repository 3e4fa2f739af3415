from fastapi import Request

from ..services.directory_service import DirectoryService


def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory_service
