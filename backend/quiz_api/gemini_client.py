from __future__ import annotations
import httpx
from typing import Any, Dict, Optional
from .settings import Settings


class OracleError(RuntimeError):
	pass


class GeminiClient:
	def __init__(self, settings: Settings, *, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
		self.api_key = settings.gemini_api_key
		if not self.api_key:
			raise ValueError("GOOGLE_API_KEY is not configured")
		self.model = settings.gemini_model
		self.provider = settings.gemini_provider
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		self._client = httpx.AsyncClient(timeout=settings.gemini_timeout_seconds, transport=transport)

	async def generate(self, prompt: str) -> str:
		payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise OracleError(f"Gemini returned HTTP {http_err.response.status_code}") from http_err
		except httpx.RequestError as net_err:
			raise OracleError(f"Gemini request failed: {net_err}") from net_err
		try:
			data = r.json()
			return data["candidates"][0]["content"]["parts"][0]["text"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise OracleError(f"Unexpected Gemini response: {r.text}") from err

	async def aclose(self) -> None:
		await self._client.aclose()
