from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional

# ============= PERSISTED STATUS SCHEMAS =============

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MaintenanceModeViewModel(CamelModel):
    #extra display fields supplied by the host are kept as-is
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    page_title: str = "Maintenance"
    title: str = "We'll be right back"
    text: str = "Service temporarily unavailable for maintenance"


class StatusSettings(CamelModel):
    view_model: MaintenanceModeViewModel = Field(default_factory=MaintenanceModeViewModel)
    template_name: Optional[str] = Field(None, max_length=200)
    use_template: bool = False


class MaintenanceModeStatus(CamelModel):
    is_in_maintenance_mode: bool = False
    is_content_frozen: bool = False
    using_web_config: bool = False
    settings: StatusSettings = Field(default_factory=StatusSettings)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "MaintenanceModeStatus":
        return cls.model_validate_json(raw)

# ============= CONTROL SCHEMAS =============

class MaintenanceToggle(BaseModel):
    enabled: bool
