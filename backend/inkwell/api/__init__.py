"""API 路由"""
from fastapi import APIRouter
from .v1 import auth, users, notes, folders, tags, ai

api_router = APIRouter()

# 注册路由
api_router.include_router(auth.router, prefix="/auth", tags=["认证"])
api_router.include_router(users.router, prefix="/users", tags=["用户"])
api_router.include_router(notes.router, prefix="/notes", tags=["笔记"])
api_router.include_router(folders.router, prefix="/folders", tags=["文件夹"])
api_router.include_router(tags.router, prefix="/tags", tags=["标签"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
