from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routes import students, goals, objectives, data_points, data, reports
from dotenv import load_dotenv
import logging
import os

load_dotenv()

logging.basicConfig(level=logging.INFO)

app = FastAPI(
    redirect_slashes=False,
    title="Sprout IEP API",
    description="API for tracking IEP goals, objectives and progress data",
    version="1.0.0",
    openapi_tags=[
        {
            "name": "Data",
            "description": "Backup export and import-merge of the whole record set",
        },
    ],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[os.getenv("FRONTEND_URL", "http://localhost:5173")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(students.router, prefix="/students")
app.include_router(goals.router, prefix="/goals")
app.include_router(objectives.router, prefix="/objectives")
app.include_router(data_points.router, prefix="/data-points")
app.include_router(data.router, prefix="/data", tags=["Data"])
app.include_router(reports.router, prefix="/reports")
