from taskhub.models.tasks import TaskStatus


async def test_list_tasks_of_project(client, make_user, make_project, make_task, make_tag, auth_headers):
    user = await make_user()
    project = await make_project(user)
    tag = await make_tag("Urgent")
    task = await make_task(project, user, title="Test Task", tags=(tag,))

    response = await client.get(f"/projects/{project.id}/tasks", headers=auth_headers(user))
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    item = data[0]
    assert item["id"] == task.id
    assert item["title"] == "Test Task"
    assert item["creator"]["id"] == user.id
    assert item["assignee"] is None
    assert item["tags"] == [{"id": tag.id, "name": "Urgent", "color": "#FF0000"}]
    assert item["commentCount"] == 0
    assert "comments" not in item


async def test_list_tasks_never_leaks_other_projects(client, make_user, make_project, make_task, auth_headers):
    user = await make_user()
    p1 = await make_project(user, name="P1")
    p2 = await make_project(user, name="P2")
    t1 = await make_task(p1, user, title="T1")
    await make_task(p2, user, title="T2")

    response = await client.get(f"/projects/{p1.id}/tasks", headers=auth_headers(user))
    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [t1.id]


async def test_non_member_cannot_list_tasks(client, make_user, make_project, auth_headers):
    user = await make_user()
    other_owner = await make_user("Other")
    other_project = await make_project(other_owner, name="Other Project")

    response = await client.get(f"/projects/{other_project.id}/tasks", headers=auth_headers(user))
    assert response.status_code == 403
    assert response.json()["error"] == "You do not have permission to access this project"


async def test_create_task(client, make_user, make_project, auth_headers):
    user = await make_user()
    project = await make_project(user)

    response = await client.post(f"/projects/{project.id}/tasks", json={
        "title": "New Task",
        "description": "New Description",
        "status": "TODO",
        "priority": "HIGH",
        "dueDate": "2026-12-31T09:00:00Z",
    }, headers=auth_headers(user))
    assert response.status_code == 201, f"Create failed: {response.text}"
    data = response.json()
    assert data["title"] == "New Task"
    assert data["status"] == "TODO"
    assert data["priority"] == "HIGH"
    assert data["dueDate"].startswith("2026-12-31T09:00:00")
    assert data["creatorId"] == user.id
    assert data["projectId"] == project.id
    assert data["comments"] == []

    response = await client.get(f"/projects/{project.id}/tasks/{data['id']}", headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json()["title"] == "New Task"


async def test_create_task_with_empty_title_is_invalid(client, make_user, make_project, auth_headers):
    user = await make_user()
    project = await make_project(user)

    response = await client.post(
        f"/projects/{project.id}/tasks", json={"title": "", "status": "TODO"}, headers=auth_headers(user)
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input data"
    assert [d["field"] for d in body["details"]] == ["title"]


async def test_long_title_is_stored_whole(client, make_user, make_project, auth_headers):
    user = await make_user()
    project = await make_project(user)

    title = "x" * 300
    response = await client.post(
        f"/projects/{project.id}/tasks", json={"title": title, "status": "TODO"}, headers=auth_headers(user)
    )
    assert response.status_code == 201, response.text
    assert response.json()["title"] == title


async def test_non_member_gets_forbidden_before_validation(client, make_user, make_project, auth_headers):
    owner = await make_user("Owner")
    outsider = await make_user("Outsider")
    project = await make_project(owner)

    response = await client.post(
        f"/projects/{project.id}/tasks", json={"title": "", "status": "nope"}, headers=auth_headers(outsider)
    )
    assert response.status_code == 403
    assert "details" not in response.json()


async def test_create_task_with_assignee_and_tags(client, make_user, make_project, make_tag, auth_headers):
    owner = await make_user("Owner")
    member = await make_user("Member")
    project = await make_project(owner, members=(member,))
    bug = await make_tag("Bug")
    urgent = await make_tag("Urgent")

    response = await client.post(f"/projects/{project.id}/tasks", json={
        "title": "Fix login",
        "status": "IN_PROGRESS",
        "assigneeId": member.id,
        "tagIds": [urgent.id, bug.id],
    }, headers=auth_headers(owner))
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["assignee"]["id"] == member.id
    assert [t["id"] for t in data["tags"]] == [urgent.id, bug.id]


async def test_create_task_with_unknown_references_is_not_found(
    client, make_user, make_project, auth_headers
):
    user = await make_user()
    project = await make_project(user)

    response = await client.post(f"/projects/{project.id}/tasks", json={
        "title": "t", "status": "TODO", "tagIds": ["missing-tag"],
    }, headers=auth_headers(user))
    assert response.status_code == 404

    response = await client.post(f"/projects/{project.id}/tasks", json={
        "title": "t", "status": "TODO", "assigneeId": "missing-user",
    }, headers=auth_headers(user))
    assert response.status_code == 404

    response = await client.get(f"/projects/{project.id}/tasks", headers=auth_headers(user))
    assert response.json() == []


async def test_update_task_fields(client, make_user, make_project, make_task, auth_headers):
    user = await make_user()
    project = await make_project(user)
    task = await make_task(project, user, title="Draft")

    response = await client.patch(f"/projects/{project.id}/tasks/{task.id}", json={
        "title": "Final",
        "status": "DONE",
        "priority": "LOW",
        "assigneeId": user.id,
    }, headers=auth_headers(user))
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["title"] == "Final"
    assert data["status"] == TaskStatus.DONE.value
    assert data["priority"] == "LOW"
    assert data["assignee"]["id"] == user.id

    response = await client.patch(
        f"/projects/{project.id}/tasks/{task.id}", json={"assigneeId": None}, headers=auth_headers(user)
    )
    assert response.status_code == 200
    assert response.json()["assignee"] is None
    assert response.json()["title"] == "Final"


async def test_tag_replacement_is_a_full_overwrite(
    client, make_user, make_project, make_task, make_tag, auth_headers
):
    user = await make_user()
    project = await make_project(user)
    a = await make_tag("A")
    b = await make_tag("B")
    c = await make_tag("C")
    task = await make_task(project, user, tags=(a, b))
    url = f"/projects/{project.id}/tasks/{task.id}"

    response = await client.patch(url, json={"tagIds": [c.id]}, headers=auth_headers(user))
    assert response.status_code == 200, response.text
    assert [t["id"] for t in response.json()["tags"]] == [c.id]

    # Absent tagIds leaves tags untouched
    response = await client.patch(url, json={"title": "Renamed"}, headers=auth_headers(user))
    assert [t["id"] for t in response.json()["tags"]] == [c.id]

    # Order follows the request; repeats collapse
    response = await client.patch(url, json={"tagIds": [b.id, a.id, b.id]}, headers=auth_headers(user))
    assert [t["id"] for t in response.json()["tags"]] == [b.id, a.id]

    response = await client.patch(url, json={"tagIds": []}, headers=auth_headers(user))
    assert response.json()["tags"] == []


async def test_failed_tag_replacement_keeps_previous_tags(
    client, make_user, make_project, make_task, make_tag, auth_headers
):
    user = await make_user()
    project = await make_project(user)
    a = await make_tag("A")
    task = await make_task(project, user, tags=(a,))
    url = f"/projects/{project.id}/tasks/{task.id}"

    response = await client.patch(url, json={"tagIds": ["missing"]}, headers=auth_headers(user))
    assert response.status_code == 404

    response = await client.get(url, headers=auth_headers(user))
    assert [t["id"] for t in response.json()["tags"]] == [a.id]


async def test_update_missing_task_is_not_found(client, make_user, make_project, auth_headers):
    user = await make_user()
    project = await make_project(user)

    response = await client.patch(
        f"/projects/{project.id}/tasks/does-not-exist", json={"title": "x"}, headers=auth_headers(user)
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


async def test_task_from_another_project_is_not_found(client, make_user, make_project, make_task, auth_headers):
    user = await make_user()
    p1 = await make_project(user, name="P1")
    p2 = await make_project(user, name="P2")
    t2 = await make_task(p2, user)

    response = await client.get(f"/projects/{p1.id}/tasks/{t2.id}", headers=auth_headers(user))
    assert response.status_code == 404

    response = await client.delete(f"/projects/{p1.id}/tasks/{t2.id}", headers=auth_headers(user))
    assert response.status_code == 404


async def test_delete_task(client, make_user, make_project, make_task, auth_headers):
    user = await make_user()
    project = await make_project(user)
    task = await make_task(project, user)
    url = f"/projects/{project.id}/tasks/{task.id}"

    response = await client.delete(url, headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted"}

    response = await client.delete(url, headers=auth_headers(user))
    assert response.status_code == 404

    response = await client.get(url, headers=auth_headers(user))
    assert response.status_code == 404


async def test_task_detail_lists_comments_newest_first(
    client, make_user, make_project, make_task, auth_headers
):
    user = await make_user()
    project = await make_project(user)
    task = await make_task(project, user)
    url = f"/projects/{project.id}/tasks/{task.id}"

    for content in ("first", "second", "third"):
        response = await client.post(f"{url}/comments", json={"content": content}, headers=auth_headers(user))
        assert response.status_code == 201

    response = await client.get(url, headers=auth_headers(user))
    assert [c["content"] for c in response.json()["comments"]] == ["third", "second", "first"]
    assert response.json()["comments"][0]["author"]["id"] == user.id

    response = await client.get(f"/projects/{project.id}/tasks", headers=auth_headers(user))
    assert response.json()[0]["commentCount"] == 3
