"""People service API (/api/people).

The people service updates every record type with PUT.
"""

from gateway.client import GatewayClient
from gateway.resource import Resource

BASE_PATH = "/api/people"


class PeopleApi:
    """People, teams, skills and crafts."""

    def __init__(self, client: GatewayClient):
        self.people = Resource(client, f"{BASE_PATH}/people", "person", plural="people", update_method="PUT")
        self.teams = Resource(client, f"{BASE_PATH}/teams", "team", update_method="PUT")
        self.team_members = Resource(client, f"{BASE_PATH}/team-members", "team member", update_method="PUT")
        self.skills = Resource(client, f"{BASE_PATH}/skills", "skill", update_method="PUT")
        self.person_skills = Resource(client, f"{BASE_PATH}/person-skills", "person skill", update_method="PUT")
        self.crafts = Resource(client, f"{BASE_PATH}/crafts", "craft", update_method="PUT")
        self.person_crafts = Resource(client, f"{BASE_PATH}/person-crafts", "person craft", update_method="PUT")
