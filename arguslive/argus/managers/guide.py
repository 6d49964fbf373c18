"""Guide service: program listings."""

from datetime import datetime
from urllib.parse import quote

from arguslive.argus.client import ArgusClient, decode, decode_list
from arguslive.argus.types import GuideProgram, GuideProgramSummary, format_argus_date
from arguslive.core.exceptions import TransportFault


class GuideManager:
    """ARGUS TV Guide service operations."""

    def __init__(self, client: ArgusClient):
        self._client = client

    def get_channel_programs_between(
        self,
        guide_channel_id: str,
        lower_time: datetime,
        upper_time: datetime,
    ) -> list[GuideProgramSummary]:
        """Programs on a guide channel overlapping [lower_time, upper_time)."""
        lower = quote(format_argus_date(lower_time), safe="")
        upper = quote(format_argus_date(upper_time), safe="")
        data = self._client.get(f"Guide/ChannelPrograms/{guide_channel_id}/{lower}/{upper}")
        return decode_list(GuideProgramSummary.from_api, data, "guide programs")

    def get_program_by_id(self, guide_program_id: str) -> GuideProgram:
        """Full details (description) of a guide program."""
        data = self._client.get(f"Guide/Program/{guide_program_id}")
        if not data:
            raise TransportFault(f"Guide program {guide_program_id} not found", status_code=404)
        return decode(GuideProgram.from_api, data, "guide program")
