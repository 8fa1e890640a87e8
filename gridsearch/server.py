import logging

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from gridsearch.settings import Settings, settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("gridsearch")


def create_app(cfg: Settings | None = None) -> FastAPI:
    from contextlib import asynccontextmanager
    from gridsearch.dictionary import store

    cfg = cfg or settings

    async def _reload(source: str | None = None):
        from gridsearch.dictionary import read_lines

        source = source or cfg.DICTIONARY_SOURCE
        lines = await run_in_threadpool(read_lines, source, cfg.DICTIONARY_TIMEOUT)
        index = await run_in_threadpool(store.reload, lines, cfg.MIN_WORD_LENGTH, cfg.MAX_WORD_LENGTH)
        logger.info("Dictionary loaded from %s (%d words)", source, len(index.words))
        return index

    async def _json_object(request: Request, allow_empty: bool = False) -> dict:
        if allow_empty and not await request.body():
            return {}
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(400, "Request body must be valid JSON")
        if not isinstance(body, dict):
            raise HTTPException(400, "Request body must be a JSON object")
        return body

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        from gridsearch.errors import GridSearchError

        logger.info(
            "Loading dictionary from %s (lengths %d-%d)",
            cfg.DICTIONARY_SOURCE, cfg.MIN_WORD_LENGTH, cfg.MAX_WORD_LENGTH,
        )
        try:
            await _reload()
        except (GridSearchError, ValueError) as e:
            # Service stays up; /solve answers 503 until a reload succeeds
            logger.error("Dictionary not loaded: %s", e)

        yield

    application = FastAPI(title="Grid Word Search", lifespan=lifespan)

    @application.get("/health")
    async def health():
        word_count = len(store.current.words) if store.loaded else 0
        return {"status": "ok", "dictionary_loaded": store.loaded, "word_count": word_count}

    @application.post("/solve")
    async def solve(request: Request, background_tasks: BackgroundTasks):
        from gridsearch.errors import DictionaryNotLoadedError, InvalidGridError
        from gridsearch.grid import Grid, parse_letters
        from gridsearch.metrics import StageTimer
        from gridsearch.notifier import send_notification
        from gridsearch.solver import search_all

        body = await _json_object(request)

        timer = StageTimer()

        with timer.stage("parse"):
            letters = body.get("letters")
            if isinstance(letters, str):
                letters = parse_letters(letters)
            if not isinstance(letters, list):
                raise HTTPException(400, "'letters' must be a list of letters or a string")
            size = body.get("size", cfg.GRID_SIZE)
            if not isinstance(size, int) or isinstance(size, bool):
                raise HTTPException(400, "'size' must be an integer")
            try:
                grid = Grid.from_letters(letters, size)
            except InvalidGridError as e:
                raise HTTPException(400, str(e))

        try:
            index = store.current
        except DictionaryNotLoadedError as e:
            raise HTTPException(503, str(e))

        logger.info("Board %dx%d: %s", grid.size, grid.size, grid)

        with timer.stage("search"):
            report = await run_in_threadpool(search_all, grid, index)

        logger.info(
            "Found %d unique words (%d instances)",
            report.unique_word_count, report.total_instance_count,
        )

        if cfg.NOTIFY:
            background_tasks.add_task(
                send_notification, report, grid, cfg.NTFY_TOPIC, cfg.NTFY_URL,
                cfg.NOTIFY_WORDS_PER_GROUP,
            )

        result = {
            "grid_size": grid.size,
            "board": grid.rows(),
            "results": [
                {"row": r, "col": c, "letter": grid.letter_at(r, c), "words": words}
                for (r, c), words in sorted(report.found.items())
            ],
            "words": report.unique_words,
            "unique_word_count": report.unique_word_count,
            "total_instance_count": report.total_instance_count,
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        }

        if cfg.DEBUG:
            _save_debug_result(cfg, result)

        return JSONResponse(result)

    @application.post("/api/dictionary/reload")
    async def reload_dictionary(request: Request):
        from gridsearch.errors import DictionarySourceError, EmptyDictionaryError

        body = await _json_object(request, allow_empty=True)
        source = body.get("source")
        if source is not None and not cfg.DEBUG:
            raise HTTPException(403, "Custom dictionary sources are only accepted in DEBUG mode")
        if source is not None and not isinstance(source, str):
            raise HTTPException(400, "'source' must be a string")
        try:
            index = await _reload(source)
        except EmptyDictionaryError as e:
            raise HTTPException(400, str(e))
        except DictionarySourceError as e:
            raise HTTPException(502, str(e))
        return {"word_count": len(index.words), "prefix_count": len(index.prefixes)}

    @application.get("/api/settings")
    async def api_get_settings():
        from gridsearch.settings import EDITABLE_FIELDS, get_editable_settings

        values = get_editable_settings(cfg)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from gridsearch.errors import GridSearchError
        from gridsearch.settings import get_editable_settings, update_settings

        body = await _json_object(request)

        before = (cfg.MIN_WORD_LENGTH, cfg.MAX_WORD_LENGTH)
        errors = update_settings(cfg, **body)

        if (cfg.MIN_WORD_LENGTH, cfg.MAX_WORD_LENGTH) != before:
            try:
                await _reload()
            except GridSearchError as e:
                logger.error("Dictionary reload after settings change failed: %s", e)
                errors["dictionary"] = str(e)

        if errors:
            return JSONResponse({"updated": get_editable_settings(cfg), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(cfg)})

    return application


def _save_debug_result(cfg: Settings, result: dict):
    import json
    from datetime import datetime

    cfg.DEBUG_DIR.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = cfg.DEBUG_DIR / f"{ts}_result.json"
    with open(path, "w") as f:
        json.dump({"timestamp": ts, **result}, f, indent=2)

    logger.info("Saved debug result to %s", path)


app = create_app()
