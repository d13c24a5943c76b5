import json
import logging
import re
from typing import List, Literal

import httpx
from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from smartretire.core.config import settings
from smartretire.models.scenario import RetirementScenario

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a retirement planning expert. Provide specific, actionable advice."


class AIServiceError(Exception):
    """The language model could not be reached or returned unusable output."""


class AIRecommendation(BaseModel):
    title: str
    description: str
    impact: Literal["High", "Medium", "Low"]
    category: str


class AIRecommendationList(BaseModel):
    recommendations: List[AIRecommendation]


def _money(value) -> str:
    return f"${float(value or 0):,.0f}"


class AIService:
    @staticmethod
    def build_prompt(scenario: RetirementScenario) -> str:
        spouse_block = ""
        if scenario.hasSpouse:
            spouse_block = f"""
Spouse Age: {scenario.spouseAge}
Spouse Retirement Age: {scenario.spouseRetirementAge}
Spouse Social Security Age: {scenario.spouseSocialSecurityAge}
Spouse Social Security: {_money(scenario.spouseSocialSecurity)}/month
"""

        return f"""You are a retirement planning expert. Analyze this retirement scenario and provide 5 specific, actionable recommendations:

Current Age: {scenario.currentAge}
Retirement Age: {scenario.retirementAge}
Life Expectancy: {scenario.lifeExpectancy}
Current Savings: {_money(scenario.currentSavings)}
Monthly Expenses: {_money(scenario.monthlyExpenses)}
Social Security Age: {scenario.socialSecurityAge}
Estimated Social Security: {_money(scenario.estimatedSocialSecurity)}/month
Readiness Score: {scenario.readinessScore}/100
Projected Shortfall: {_money(scenario.projectedShortfall)}
{spouse_block}
Provide recommendations in JSON format:
{{
  "recommendations": [
    {{
      "title": "Recommendation title",
      "description": "Detailed explanation",
      "impact": "High/Medium/Low",
      "category": "Social Security/Tax Strategy/Savings/Healthcare/RMD"
    }}
  ]
}}

Output RAW JSON only. Do not output markdown code blocks."""

    @staticmethod
    def generate_retirement_recommendations(scenario: RetirementScenario) -> List[AIRecommendation]:
        """
        Asks the configured provider for free-text recommendations on a scenario.

        Providers: 'google' (Gemini, needs GEMINI_API_KEY) or 'ollama'.
        There is no retry and no fallback: any provider, transport or parsing
        failure is raised as AIServiceError for the caller to report.
        """
        prompt = AIService.build_prompt(scenario)
        provider = (settings.AI_PROVIDER or "").lower()

        if provider == "google":
            if not settings.GEMINI_API_KEY:
                raise AIServiceError("GEMINI_API_KEY is not configured")
            logger.info(f"Using AI Provider: Google ({settings.GEMINI_MODEL})")
            text = AIService._generate_google(settings.GEMINI_API_KEY, prompt)
        elif provider == "ollama":
            logger.info(f"Using AI Provider: Ollama ({settings.OLLAMA_MODEL})")
            text = AIService._generate_ollama(prompt)
        else:
            raise AIServiceError(f"Unknown AI_PROVIDER '{settings.AI_PROVIDER}'")

        return AIService.parse_recommendations(text)

    @staticmethod
    def parse_recommendations(text: str) -> List[AIRecommendation]:
        # Strip <think>...</think> (DeepSeek reasoning) and markdown fences
        text = re.sub(r'<think>.*?</think>', '', text or "", flags=re.DOTALL)
        text = text.replace('```json', '').replace('```', '').strip()
        if not text:
            raise AIServiceError("AI provider returned an empty response")

        try:
            parsed = json.loads(text)
            # Some models answer with a bare array instead of the wrapper object
            if isinstance(parsed, list):
                parsed = {"recommendations": parsed}
            return AIRecommendationList.model_validate(parsed).recommendations
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Unparseable AI response: {e}")
            raise AIServiceError("AI provider returned malformed recommendations") from e

    @staticmethod
    def _generate_google(api_key: str, prompt: str) -> str:
        try:
            client = genai.Client(api_key=api_key)
            response = client.models.generate_content(
                model=settings.GEMINI_MODEL,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_PROMPT,
                    response_mime_type="application/json",
                ),
            )
            return response.text
        except Exception as e:
            logger.error(f"Google AI Error: {e}")
            raise AIServiceError("Google AI request failed") from e

    @staticmethod
    def _generate_ollama(prompt: str) -> str:
        url = f"{settings.OLLAMA_BASE_URL}/api/generate"
        payload = {
            "model": settings.OLLAMA_MODEL,
            "system": SYSTEM_PROMPT,
            "prompt": prompt,
            "stream": False,
            "format": "json"
        }

        try:
            response = httpx.post(url, json=payload, timeout=settings.AI_TIMEOUT_SECONDS)
            response.raise_for_status()
            return response.json().get("response", "")
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama AI Error: {e}")
            if e.response.status_code == 404:
                logger.error(f"Make sure model '{settings.OLLAMA_MODEL}' is pulled: `ollama pull {settings.OLLAMA_MODEL}`")
            raise AIServiceError("Ollama request failed") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Ollama AI Error: {e}")
            raise AIServiceError("Ollama request failed") from e
