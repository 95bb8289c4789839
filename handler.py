"""
AWS Lambda handler — Mangum wrapper for the metaquality FastAPI app.
"""

from mangum import Mangum

from metaquality.main import app

handler = Mangum(app, lifespan="off")
