"""FastAPI dependency providers.

Every collaborator a route needs comes through here, so tests can replace
any of them with `app.dependency_overrides`.
"""

from __future__ import annotations

import logging
import sqlite3
from functools import lru_cache
from typing import Iterator

from fastapi import Depends

from .agent import Agent
from .ai import GenerationClient
from .config import Settings, get_settings
from .local_guide import LocalGuide
from .reading import ReadingPipeline
from .storage.prompts_db import PromptStore
from .storage.questions_db import QuestionStore
from .storage.readings_db import ReadingStore

log = logging.getLogger("clarity.deps")


@lru_cache(maxsize=None)
def _prompt_store(db_path: str) -> PromptStore:
    store = PromptStore(db_path)
    try:
        store.init_db()
    except (sqlite3.Error, OSError) as e:
        # readings still work off the built-in template
        log.warning("prompt store unavailable path=%s error=%s", db_path, e)
    return store


@lru_cache(maxsize=None)
def _reading_store(db_path: str) -> ReadingStore:
    store = ReadingStore(db_path)
    try:
        store.init_db()
    except (sqlite3.Error, OSError) as e:
        # readings are still generated, just not saved
        log.warning("reading store unavailable path=%s error=%s", db_path, e)
    return store


@lru_cache(maxsize=None)
def _question_store(db_path: str) -> QuestionStore:
    store = QuestionStore(db_path)
    store.init_db()
    return store


def get_prompt_store(settings: Settings = Depends(get_settings)) -> PromptStore:
    return _prompt_store(settings.db_path)


def get_reading_store(settings: Settings = Depends(get_settings)) -> ReadingStore:
    return _reading_store(settings.db_path)


def get_question_store(settings: Settings = Depends(get_settings)) -> QuestionStore:
    return _question_store(settings.db_path)


def get_generation_client(settings: Settings = Depends(get_settings)) -> Iterator[GenerationClient]:
    client = GenerationClient.from_settings(settings)
    try:
        yield client
    finally:
        client.client.close()


def get_local_guide(settings: Settings = Depends(get_settings)) -> Iterator[LocalGuide]:
    guide = LocalGuide.from_settings(settings)
    try:
        yield guide
    finally:
        guide.close()


def get_reading_pipeline(
    prompts: PromptStore = Depends(get_prompt_store),
    generator: GenerationClient = Depends(get_generation_client),
) -> ReadingPipeline:
    return ReadingPipeline(prompts, generator)


def get_agent(
    generator: GenerationClient = Depends(get_generation_client),
    guide: LocalGuide = Depends(get_local_guide),
) -> Agent:
    return Agent(generator, guide)
