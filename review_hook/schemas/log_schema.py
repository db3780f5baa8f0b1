from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from typing import Dict, Any, Optional
from enum import Enum
import uuid


class ActionType(str, Enum):
    """
    Types of entries written to the interaction log.
    """
    STARTUP = "STARTUP"         # Hook invocation
    REVIEW = "CODE_REVIEW"      # One file sent to the model
    COMPLETION = "COMPLETION"   # All files processed


class ReviewLogEntry(BaseModel):
    """
    Pydantic model for interaction log entries.

    - id: Unique identifier (UUID)
    - timestamp: ISO format timestamp
    - agent: "SYSTEM" or "Reviewer"
    - model: Model used (None for SYSTEM entries)
    - action: ActionType enum value
    - details: input_prompt and output_response are mandatory for CODE_REVIEW
    - status: SUCCESS, FAILURE, STARTED, COMPLETED or COMPLETED_WITH_WARNINGS
    """
    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the log entry"
    )
    timestamp: str = Field(
        default_factory=lambda: datetime.now().isoformat(),
        description="ISO format timestamp"
    )
    agent: str = Field(..., description="Who produced the entry")
    model: Optional[str] = Field(None, description="Model used, e.g. 'qwen2.5-coder:7b'")
    action: ActionType = Field(..., description="Type of action performed")
    details: Dict[str, Any] = Field(default_factory=dict)
    status: str = Field(
        ...,
        pattern="^(SUCCESS|FAILURE|STARTED|COMPLETED|COMPLETED_WITH_WARNINGS)$",
    )

    @model_validator(mode='after')
    def validate_details(self) -> 'ReviewLogEntry':
        """A CODE_REVIEW entry must carry both the prompt and the reply."""
        if self.action == ActionType.REVIEW.value:
            required_keys = ["input_prompt", "output_response"]
            missing_keys = [key for key in required_keys if key not in self.details]

            if missing_keys:
                raise ValueError(
                    f"Fields {missing_keys} are missing from 'details'; "
                    f"they are required for action {self.action}."
                )

        return self
