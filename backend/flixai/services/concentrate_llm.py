from __future__ import annotations

from typing import Any, Dict, Generator, List, Optional, cast

import httpx

from llama_index.core.llms.callbacks import llm_completion_callback
from llama_index.core.llms import (
    CompletionResponse,
    CustomLLM,
    LLMMetadata,
)

JsonDict = Dict[str, Any]


class ConcentrateAPIError(RuntimeError):
    pass


class ConcentrateResponsesLLM(CustomLLM):
    """
    LlamaIndex CustomLLM adapter for the Concentrate AI /responses endpoint.

    Only plain completions are needed here: one prompt in, one text blob out.
    Chat methods come from CustomLLM, which maps them onto ``complete``.

    Important:
    - This is a pydantic-backed model (via CustomLLM), so we declare fields here and do NOT override __init__.
    """

    model: str
    api_key: str
    base_url: str = "https://api.concentrate.ai/v1"
    timeout: int = 60
    default_max_output_tokens: Optional[int] = None
    default_temperature: Optional[float] = None
    json_mode: bool = False

    @property
    def metadata(self) -> LLMMetadata:
        return LLMMetadata(
            context_window=8192,
            num_output=self.default_max_output_tokens or 1024,
            is_chat_model=False,
            model_name=self.model,
        )

    # -----------------------------
    # Low-level helpers
    # -----------------------------
    def _url(self) -> str:
        return f"{self.base_url.rstrip('/')}/responses"

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _build_payload(self, prompt: str, **params: Any) -> JsonDict:
        """
        Build a non-streaming /responses payload.

        Pass-through: temperature, top_p, max_output_tokens, routing, etc.
        None values are dropped so the gateway applies its own defaults.
        """
        payload: JsonDict = {"model": self.model, "input": prompt, "stream": False}

        if self.default_max_output_tokens is not None:
            payload["max_output_tokens"] = self.default_max_output_tokens
        if self.default_temperature is not None:
            payload["temperature"] = self.default_temperature
        if self.json_mode:
            payload["text"] = {"format": {"type": "json_object"}}

        for k, v in params.items():
            if v is None or k in {"formatted", "stream"}:
                continue
            payload[k] = v

        return payload

    # -----------------------------
    # JSON output extraction
    # -----------------------------
    def _extract_text(self, data: JsonDict) -> str:
        """
        Extract assistant text from /responses JSON.

        Common Concentrate shapes include:
        - {"output_text": "..."}
        - {"output":[{"type":"message","role":"assistant","content":[{"type":"output_text","text":"..."}]}]}
        """
        out_text = data.get("output_text")
        if isinstance(out_text, str) and out_text.strip():
            return out_text

        parts: List[str] = []
        for item in data.get("output") or []:
            if not isinstance(item, dict) or item.get("type") != "message":
                continue
            for block in item.get("content") or []:
                if isinstance(block, dict) and isinstance(block.get("text"), str):
                    parts.append(block["text"])
        if parts:
            return "".join(parts)

        txt = data.get("text")
        if isinstance(txt, str) and txt.strip():
            return txt

        raise ConcentrateAPIError("No text found in /responses response.")

    # -----------------------------
    # Requests
    # -----------------------------
    def _post_json(self, payload: JsonDict) -> JsonDict:
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.post(self._url(), json=payload, headers=self._headers())
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, dict):
            raise ConcentrateAPIError("Unexpected /responses response (expected JSON object).")
        return cast(JsonDict, data)

    async def _apost_json(self, payload: JsonDict) -> JsonDict:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(self._url(), json=payload, headers=self._headers())
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, dict):
            raise ConcentrateAPIError("Unexpected /responses response (expected JSON object).")
        return cast(JsonDict, data)

    # -----------------------------
    # LlamaIndex Completion API
    # -----------------------------
    @llm_completion_callback()
    def complete(self, prompt: str, formatted: bool = False, **params: Any) -> CompletionResponse:
        data = self._post_json(self._build_payload(prompt, **params))
        return CompletionResponse(text=self._extract_text(data), raw=data)

    @llm_completion_callback()
    async def acomplete(self, prompt: str, formatted: bool = False, **params: Any) -> CompletionResponse:
        data = await self._apost_json(self._build_payload(prompt, **params))
        return CompletionResponse(text=self._extract_text(data), raw=data)

    @llm_completion_callback()
    def stream_complete(self, prompt: str, formatted: bool = False, **params: Any) -> Generator[CompletionResponse, None, None]:
        # The gateway is called without SSE; the whole answer arrives as one chunk.
        response = self.complete(prompt, formatted=formatted, **params)
        yield CompletionResponse(text=response.text, delta=response.text, raw=response.raw)
