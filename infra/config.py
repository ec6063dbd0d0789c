"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Defaults match the production deployment: Gemini for answers, a JSON file
for incidents, Twilio for delivery.
"""

import os
from typing import Literal
from dataclasses import dataclass

from gateway.formatter import REPLY_LIMIT
from gateway.handler import InboundMessageHandler
from incidents import (
    IncidentStore,
    InMemoryIncidentStore,
    JsonFileIncidentStore,
    SerializedIncidentStore,
    SQLiteIncidentStore,
)
from inference import (
    AnswerOracle,
    DEFAULT_PROMPT_TEMPLATE,
    GeminiModelBackend,
    ModelBackend,
    OllamaModelBackend,
    StubModelBackend,
)
from transport.twilio.sender import LoggingMessageSender, MessageSender, TwilioMessageSender


OracleBackendType = Literal["gemini", "ollama", "stub"]
IncidentStoreBackendType = Literal["json", "sqlite", "memory"]
DeliveryBackendType = Literal["twilio", "log"]


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # Oracle
    oracle_backend: OracleBackendType
    gemini_api_key: str
    gemini_model: str
    ollama_model: str
    ollama_base_url: str
    oracle_timeout_s: float
    oracle_prompt_template: str

    # Incidents
    incident_store_backend: IncidentStoreBackendType
    incidents_file: str
    incidents_db_path: str
    incident_store_serialized: bool

    # Delivery
    delivery_backend: DeliveryBackendType
    twilio_account_sid: str
    twilio_auth_token: str
    twilio_sending_address: str
    reply_limit: int

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - Oracle: gemini (gemini-1.5-flash), 30s timeout
        - Incidents: ./incidents.json, appends not serialized
        - Delivery: twilio
        """
        return cls(
            # Oracle Configuration
            oracle_backend=os.getenv("ORACLE_BACKEND", "gemini"),  # type: ignore
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
            ollama_model=os.getenv("OLLAMA_MODEL", "phi"),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
            oracle_timeout_s=float(os.getenv("ORACLE_TIMEOUT_S", "30")),
            oracle_prompt_template=os.getenv("ORACLE_PROMPT_TEMPLATE") or DEFAULT_PROMPT_TEMPLATE,

            # Incident Store Configuration
            incident_store_backend=os.getenv("INCIDENT_STORE_BACKEND", "json"),  # type: ignore
            incidents_file=os.getenv("INCIDENTS_FILE", "./incidents.json"),
            incidents_db_path=os.getenv("INCIDENTS_DB_PATH", "./incidents.db"),
            incident_store_serialized=_env_bool("INCIDENT_STORE_SERIALIZED"),

            # Delivery Configuration
            delivery_backend=os.getenv("DELIVERY_BACKEND", "twilio"),  # type: ignore
            twilio_account_sid=os.getenv("TWILIO_ACCOUNT_SID", ""),
            twilio_auth_token=os.getenv("TWILIO_AUTH_TOKEN", ""),
            twilio_sending_address=os.getenv("TWILIO_WHATSAPP_NUMBER", ""),
            reply_limit=int(os.getenv("REPLY_LIMIT", str(REPLY_LIMIT))),
        )

    def create_model_backend(self) -> ModelBackend:
        """Create oracle model backend based on configuration."""
        if self.oracle_backend == "ollama":
            return OllamaModelBackend(
                model_name=self.ollama_model,
                base_url=self.ollama_base_url
            )
        elif self.oracle_backend == "stub":
            return StubModelBackend()
        else:
            # Default to gemini
            return GeminiModelBackend(
                api_key=self.gemini_api_key,
                model_name=self.gemini_model,
            )

    def create_oracle(self) -> AnswerOracle:
        """Wrap the model backend in the answer prompt and timeout."""
        return AnswerOracle(
            backend=self.create_model_backend(),
            prompt_template=self.oracle_prompt_template,
            timeout_s=self.oracle_timeout_s,
        )

    def create_incident_store(self) -> IncidentStore:
        """Create incident store based on configuration."""
        if self.incident_store_backend == "sqlite":
            store: IncidentStore = SQLiteIncidentStore(self.incidents_db_path)
        elif self.incident_store_backend == "memory":
            store = InMemoryIncidentStore()
        else:
            # Default to json
            store = JsonFileIncidentStore(self.incidents_file)

        if self.incident_store_serialized:
            return SerializedIncidentStore(store)
        return store

    def create_sender(self) -> MessageSender:
        """Create outbound message sender based on configuration."""
        if self.delivery_backend == "log":
            return LoggingMessageSender()
        return TwilioMessageSender(
            account_sid=self.twilio_account_sid,
            auth_token=self.twilio_auth_token,
            from_address=self.twilio_sending_address,
        )

    def create_handler(self) -> InboundMessageHandler:
        """Wire the inbound message handler from all backends."""
        return InboundMessageHandler(
            store=self.create_incident_store(),
            oracle=self.create_oracle(),
            sender=self.create_sender(),
            reply_limit=self.reply_limit,
        )


def get_config() -> InfraConfig:
    """Get global infrastructure configuration."""
    return InfraConfig.from_env()
