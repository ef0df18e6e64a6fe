"""Property-based tests for catalog aggregation and request coercion invariants."""

from hypothesis import given
from hypothesis import strategies as st

from travel_experts.models import Agency, Agent
from travel_experts.schemas.booking import CreateBookingRequest
from travel_experts.services.catalog_service import group_agents_by_agency

# Strategies for generating test data
agent_counts = st.lists(st.integers(min_value=0, max_value=5), min_size=0, max_size=15)
traveler_counts = st.one_of(
    st.none(),
    st.integers(min_value=-1000, max_value=1000),
    st.floats(allow_nan=True, allow_infinity=True),
    st.text(max_size=8),
    st.booleans(),
)


def _joined_rows(counts: list[int]) -> list[tuple[Agency, Agent | None]]:
    """Build outer-join rows: one per agent, or a single None row for an empty agency."""
    rows = []
    agent_id = 1
    for agency_id, count in enumerate(counts, start=1):
        agency = Agency(agency_id=agency_id, agncy_city=f"City {agency_id}")
        if count == 0:
            rows.append((agency, None))
        for _ in range(count):
            rows.append((agency, Agent(agent_id=agent_id, agt_last_name=f"Agent {agent_id:04d}", agency_id=agency_id)))
            agent_id += 1
    return rows


@given(counts=agent_counts)
def test_one_entry_per_agency(counts):
    """Test N agencies in the rows produce N entries regardless of agent count."""
    agencies = group_agents_by_agency(_joined_rows(counts))

    assert len(agencies) == len(counts)
    assert [len(a.agents) for a in agencies] == counts


@given(counts=agent_counts)
def test_grouping_preserves_row_order(counts):
    """Test agencies keep first-seen order and agents keep row order."""
    rows = _joined_rows(counts)
    agencies = group_agents_by_agency(rows)

    assert [a.agency_id for a in agencies] == list(range(1, len(counts) + 1))

    flattened = [agent.agent_id for agency in agencies for agent in agency.agents]
    assert flattened == [agent.agent_id for _, agent in rows if agent is not None]


@given(raw=traveler_counts)
def test_traveler_count_always_positive_integer(raw):
    """Test any traveler count input coerces to an integer of at least one."""
    request = CreateBookingRequest(
        CustFirstName="Ann",
        CustLastName="Lee",
        CustEmail="a@x.com",
        PackageId=7,
        TravelerCount=raw,
    )

    assert isinstance(request.traveler_count, int)
    assert request.traveler_count >= 1


@given(raw=st.one_of(st.text(max_size=12), st.integers()))
def test_package_reference_never_raises(raw):
    """Test any package id input splits into an integer id or a name."""
    request = CreateBookingRequest(
        CustFirstName="Ann",
        CustLastName="Lee",
        CustEmail="a@x.com",
        PackageId=raw,
    )

    package_id, name = request.package_reference()

    if package_id is not None:
        assert name is None
        assert 0 <= package_id < 10**9
    else:
        assert name is None or name == name.strip()
