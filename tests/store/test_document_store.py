from src.asistup.asistup.core.constants import COLLECTION_EMPLOYEES
from src.asistup.asistup.database.store import InMemoryDocumentStore
from src.asistup.asistup.employees.directory import EmployeeDirectory
from src.asistup.asistup.core.enums import EmployeeStatus


def test_put_replaces_whole_document():
    store = InMemoryDocumentStore()
    store.put("things", "a", {"x": 1, "y": 2})
    store.put("things", "a", {"x": 3})

    assert store.get("things", "a") == {"x": 3, "id": "a"}


def test_returned_documents_are_copies():
    store = InMemoryDocumentStore(seed={"things": [{"id": "a", "tags": ["one"]}]})

    doc = store.get("things", "a")
    doc["tags"].append("two")

    assert store.get("things", "a")["tags"] == ["one"]


def test_subscribe_delivers_initial_and_updated_snapshots():
    store = InMemoryDocumentStore()
    seen = []

    unsubscribe = store.subscribe("things", lambda docs: seen.append(sorted(d["id"] for d in docs)))
    store.put("things", "a", {})
    store.put("things", "b", {})
    store.delete("things", "a")
    unsubscribe()
    store.put("things", "c", {})

    assert seen == [[], ["a"], ["a", "b"], ["b"]]


def test_delete_missing_document():
    assert InMemoryDocumentStore().delete("things", "nope") is False


def test_directory_follows_store_and_picks_lowest_id_on_duplicate(employee_factory):
    store = InMemoryDocumentStore()
    directory = EmployeeDirectory(store)

    assert directory.find_active_by_pin("123456") is None

    for emp in (
        employee_factory(employee_id="b"),
        employee_factory(employee_id="a"),
        employee_factory(employee_id="0", status=EmployeeStatus.TERMINATED),
    ):
        store.put(COLLECTION_EMPLOYEES, emp.employee_id, emp.to_document())

    assert directory.find_active_by_pin("123456").employee_id == "a"

    directory.close()
    store.delete(COLLECTION_EMPLOYEES, "a")
    assert directory.find_active_by_pin("123456").employee_id == "a"


def test_put_if_requires_matching_fields():
    store = InMemoryDocumentStore(seed={"things": [{"id": "a", "status": "open"}]})
    seen = []
    store.subscribe("things", lambda docs: seen.append([d["status"] for d in docs]))

    assert store.put_if("things", "a", {"status": "closed"}, expected={"status": "open"}) is True
    assert store.put_if("things", "a", {"status": "reopened"}, expected={"status": "open"}) is False
    assert store.put_if("things", "b", {"status": "closed"}, expected={"status": "open"}) is False

    assert store.get("things", "a") == {"id": "a", "status": "closed"}
    assert store.get("things", "b") is None
    assert seen == [["open"], ["closed"]]
