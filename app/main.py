# app/main.py

import logging

from app import create_app
import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

@app.get("/")
def root():
    return {"status": "ok", "environment": app.state.environment.name}

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
