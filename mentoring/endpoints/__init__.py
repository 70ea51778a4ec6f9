from fastapi import APIRouter

from . import cadets, mentors, reports


ROUTERS: list[APIRouter] = [module.router for module in [cadets, mentors, reports]]
