from typing import List, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Body, Depends, File, Form, Query, Request, UploadFile
from pydantic import BaseModel
from starlette.responses import FileResponse, PlainTextResponse

from app.services.filestore import FileStore

router = APIRouter()

class UploadResponse(BaseModel):
    message: str
    fileId: str
    recordId: Optional[int] = None

class ListResponse(BaseModel):
    fileUrls: List[str]

class DeleteLink(BaseModel):
    filename: str
    link: str

class DeleteListResponse(BaseModel):
    files: List[DeleteLink]

def get_store(request: Request) -> FileStore:
    return request.app.state.filestore

def user_folder(
    folder_query: Optional[str] = Query(None, alias="userFolder"),
    folder_body: Optional[str] = Body(None, embed=True, alias="userFolder"),
) -> Optional[str]:
    # JSON body first, query string second
    return folder_body or folder_query

def _folder_query(store: FileStore, folder: Optional[str]) -> str:
    # default-folder links stay bare
    if not folder or folder == store.locator.default_folder:
        return ""
    return "?" + urlencode({"userFolder": folder})

@router.post("/upload", status_code=201, response_model=UploadResponse)
def upload(
    file: Optional[UploadFile] = File(None),
    userFolder: Optional[str] = Form(None),
    store: FileStore = Depends(get_store),
):
    result = store.upload(
        file.file if file is not None else None,
        file.filename if file is not None else None,
        userFolder,
    )
    return UploadResponse(
        message="File uploaded successfully",
        fileId=result.file.token,
        recordId=result.record_id,
    )

@router.get("/list", response_model=ListResponse)
def list_files(
    request: Request,
    userFolder: Optional[str] = Depends(user_folder),
    store: FileStore = Depends(get_store),
):
    urls = []
    for stored in store.list_files(userFolder):
        url = request.url_for("get_file", token=stored.token)
        if userFolder and userFolder != store.locator.default_folder:
            url = url.include_query_params(userFolder=userFolder)
        urls.append(str(url))
    return ListResponse(fileUrls=urls)

@router.get("/file/{token}", name="get_file")
def get_file(
    token: str,
    userFolder: Optional[str] = Depends(user_folder),
    store: FileStore = Depends(get_store),
):
    stored = store.find(token, userFolder)
    return FileResponse(stored.path)

@router.get("/deletelist", response_model=DeleteListResponse)
def delete_list(
    userFolder: Optional[str] = Depends(user_folder),
    store: FileStore = Depends(get_store),
):
    suffix = _folder_query(store, userFolder)
    files = [
        DeleteLink(filename=s.filename, link=f"/delete/{s.token}{suffix}")
        for s in store.list_files(userFolder)
    ]
    return DeleteListResponse(files=files)

@router.delete("/delete/{token}", response_class=PlainTextResponse)
def delete_file(
    token: str,
    userFolder: Optional[str] = Depends(user_folder),
    store: FileStore = Depends(get_store),
):
    store.delete(token, userFolder)
    return "File deleted successfully"

@router.delete("/deleteall", response_class=PlainTextResponse)
def delete_all(
    userFolder: Optional[str] = Depends(user_folder),
    store: FileStore = Depends(get_store),
):
    result = store.delete_all(userFolder)
    # per-file failures are logged by the store; the reply is the same either way
    headers = {
        "X-Deleted-Count": str(result.deleted_count),
        "X-Delete-Errors": str(len(result.errors)),
    }
    return PlainTextResponse("All files deleted successfully", headers=headers)
