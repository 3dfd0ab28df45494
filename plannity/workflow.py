from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, TypedDict

from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage
from langgraph.graph import StateGraph, END

from plannity.config import Settings
from plannity.fallback import generate_fallback
from plannity.itinerary import Invalid, extract_json_object, validate_itinerary
from plannity.prompts import build_prompt
from plannity.schemas import Itinerary, TripRequest


logger = logging.getLogger("plannity")


class PlanState(TypedDict, total=False):
    request: TripRequest
    number_of_days: int
    content: str | None
    error: str | None
    itinerary: Itinerary


async def _call_with_timeout(label: str, timeout_sec: int, func):
    start = time.monotonic()
    result = await asyncio.wait_for(func(), timeout=timeout_sec)
    elapsed = time.monotonic() - start
    logger.info("%s ok in %.2fs", label, elapsed)
    if elapsed > timeout_sec * 0.8:
        logger.warning("%s slow: %.2fs (timeout=%ss)", label, elapsed, timeout_sec)
    return result


def build_llm(settings: Settings) -> ChatOpenAI | None:
    """Chat model for the completion endpoint, or None without a credential."""
    if not settings.deepseek_api_key:
        return None
    return ChatOpenAI(
        api_key=settings.deepseek_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        max_retries=0,
    )


def create_graph(llm: Any | None, llm_timeout_sec: int = 60):
    """Compile the synthesis graph.

    planner_node asks the model for a plan, parse_node extracts and validates
    it, and any failure on the way routes to fallback_node.
    """

    async def planner_node(state: PlanState) -> PlanState:
        req = state["request"]
        logger.info("node:planner start destination=%s days=%s", req.destination, state["number_of_days"])
        if llm is None:
            logger.warning("node:planner completion credential not configured, using fallback plan")
            return {**state, "content": None, "error": "missing_credential"}

        prompt = build_prompt(req)
        try:
            ai = await _call_with_timeout(
                "planner_llm",
                llm_timeout_sec,
                lambda: llm.ainvoke([HumanMessage(prompt)]),
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("node:planner completion request failed: %r", exc)
            return {**state, "content": None, "error": "upstream_failed"}

        content = ai.content if isinstance(ai.content, str) else None
        logger.info("node:planner done chars=%s", len(content) if content else 0)
        return {**state, "content": content, "error": None}

    async def parse_node(state: PlanState) -> PlanState:
        req = state["request"]
        payload = extract_json_object(state.get("content"))
        if payload is None:
            logger.warning("node:parse no JSON object found in completion")
            return {**state, "error": "no_json"}

        result = validate_itinerary(payload, state["number_of_days"], req.date_range.start)
        if isinstance(result, Invalid):
            logger.warning("node:parse rejected completion at %s", result)
            return {**state, "error": "invalid_plan"}

        logger.info("node:parse done days=%s", len(result.itinerary.days))
        return {**state, "itinerary": result.itinerary, "error": None}

    async def fallback_node(state: PlanState) -> PlanState:
        req = state["request"]
        logger.info("node:fallback reason=%s", state.get("error"))
        itinerary = generate_fallback(
            req.destination,
            state["number_of_days"],
            req.date_range.start,
            req.travel_style,
        )
        return {**state, "itinerary": itinerary}

    def _after_planner(state: PlanState) -> str:
        return "fallback_node" if state.get("error") else "parse_node"

    def _after_parse(state: PlanState) -> str:
        return "fallback_node" if state.get("error") else END

    graph = StateGraph(PlanState)
    graph.add_node("planner_node", planner_node)
    graph.add_node("parse_node", parse_node)
    graph.add_node("fallback_node", fallback_node)

    graph.set_entry_point("planner_node")
    graph.add_conditional_edges("planner_node", _after_planner, ["parse_node", "fallback_node"])
    graph.add_conditional_edges("parse_node", _after_parse, ["fallback_node", END])
    graph.add_edge("fallback_node", END)

    return graph.compile()


async def synthesize(graph, request: TripRequest) -> Itinerary:
    """Run the synthesis graph; always yields a valid itinerary for ``request``."""
    result = await graph.ainvoke({"request": request, "number_of_days": request.number_of_days})
    return result["itinerary"]
