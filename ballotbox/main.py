import uvicorn
from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.orm import Session

from ballotbox.config import HOST, LOG_LEVEL, PORT
from ballotbox.infrastructure.database import Base, engine, get_db
from ballotbox.interfaces.election_controller import router as election_router
from ballotbox.interfaces.event_controller import router as event_router
from ballotbox.logging_config import setup_logging

setup_logging(LOG_LEVEL)

app = FastAPI(title="ballotbox")

app.include_router(election_router)
app.include_router(event_router)

# Create tables in the database
Base.metadata.create_all(bind=engine)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
