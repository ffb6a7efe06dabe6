# library_catalog/main.py
import logging

from fastapi import Depends, FastAPI

from .ai import GenerationClient, build_context, build_system_instruction
from .catalog.facade import LibraryFacade
from .catalog.router import router as catalog_router
from .config import Config, configure_logging
from .dependencies import get_facade, get_generation_client
from .models import AskAnswer, AskRequest


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Library Catalog",
    description=(
        "Book catalog with featured and bestseller views, plus a chat "
        "assistant that answers from the current catalog through an "
        "external text generation service."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


# 🔹 Route de base pour tester rapidement
@app.get("/")
def health_check():
    return {"status": "ok", "message": "Library catalog live"}


@app.post("/ai/ask", response_model=AskAnswer, tags=["assistant"])
def ask_ai(
    req: AskRequest,
    facade: LibraryFacade = Depends(get_facade),
    client: GenerationClient = Depends(get_generation_client),
) -> AskAnswer:
    """Answer a question about the catalog.

    Always responds 200; backend failures are reported inside ``answer``.
    """
    inventory = build_context(facade.get_all_books())
    system_context = build_system_instruction(inventory)
    answer = client.ask(req.prompt or "", system_context)
    return AskAnswer(answer=answer)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Config.HOST, port=Config.port())
