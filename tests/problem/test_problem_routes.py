import pytest
import pytest_asyncio
from fastapi import status

from codearena.data.schemas import Problem


@pytest_asyncio.fixture
async def problem_set(test_db):
    problems = [
        Problem(
            problem_number=1,
            title="Two Sum",
            description="Find two numbers that add up to a target.",
            difficulty="Easy",
            category="Arrays",
            tags=["array", "hash-table"],
            input_example="4\n2 7 11 15\n9",
            expected_output="0 1",
        ),
        Problem(
            problem_number=2,
            title="Binary Tree Paths",
            description="Print every root-to-leaf path.",
            difficulty="Medium",
            category="Trees",
            tags=["tree", "dfs"],
        ),
        Problem(
            problem_number=3,
            title="Shortest Path",
            description="Dijkstra on a weighted graph with an array of edges.",
            difficulty="Hard",
            category="Graphs",
            tags=["graph", "array"],
        ),
    ]
    test_db.add_all(problems)
    await test_db.commit()
    return problems


# Test listing problems
@pytest.mark.asyncio
async def test_list_problems(client, problem_set):
    response = await client.get("/api/v1/problems")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 3
    assert data["page"] == 1
    assert data["limit"] == 20
    assert [p["problem_number"] for p in data["results"]] == [1, 2, 3]
    assert data["results"][0]["is_solved"] is None


@pytest.mark.asyncio
async def test_list_problems_pagination(client, problem_set):
    response = await client.get("/api/v1/problems", params={"page": 2, "limit": 2})

    data = response.json()
    assert data["total"] == 3
    assert [p["problem_number"] for p in data["results"]] == [3]


@pytest.mark.asyncio
async def test_filter_by_difficulty(client, problem_set):
    response = await client.get("/api/v1/problems", params={"difficulty": "Medium"})

    data = response.json()
    assert data["total"] == 1
    assert data["results"][0]["title"] == "Binary Tree Paths"


@pytest.mark.asyncio
async def test_filter_by_unknown_difficulty(client, problem_set):
    response = await client.get("/api/v1/problems", params={"difficulty": "Impossible"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_filter_by_category_ignores_case(client, problem_set):
    response = await client.get("/api/v1/problems", params={"category": "graphs"})

    assert [p["problem_number"] for p in response.json()["results"]] == [3]


@pytest.mark.asyncio
async def test_filter_by_tags(client, problem_set):
    response = await client.get("/api/v1/problems", params={"tags": "array"})
    assert [p["problem_number"] for p in response.json()["results"]] == [1, 3]

    # Every listed tag must match
    response = await client.get("/api/v1/problems", params={"tags": "array, Graph"})
    data = response.json()
    assert data["total"] == 1
    assert data["results"][0]["problem_number"] == 3


@pytest.mark.asyncio
async def test_search(client, problem_set):
    response = await client.get("/api/v1/problems", params={"search": "PATH"})

    assert [p["problem_number"] for p in response.json()["results"]] == [2, 3]


@pytest.mark.asyncio
async def test_sort_by_difficulty_desc(client, problem_set):
    response = await client.get(
        "/api/v1/problems", params={"sortBy": "difficulty", "order": "desc"}
    )

    assert [p["difficulty"] for p in response.json()["results"]] == ["Hard", "Medium", "Easy"]


@pytest.mark.asyncio
async def test_sort_by_title(client, problem_set):
    response = await client.get("/api/v1/problems", params={"sortBy": "title"})

    assert [p["title"] for p in response.json()["results"]] == [
        "Binary Tree Paths",
        "Shortest Path",
        "Two Sum",
    ]


# Test fetching one problem
@pytest.mark.asyncio
async def test_get_problem(client, problem_set):
    response = await client.get("/api/v1/problems/1")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Two Sum"
    assert data["input_example"] == "4\n2 7 11 15\n9"
    assert data["expected_output"] == "0 1"
    assert data["tags"] == ["array", "hash-table"]
    assert data["is_solved"] is None


@pytest.mark.asyncio
async def test_get_missing_problem(client, problem_set):
    response = await client.get("/api/v1/problems/99")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Problem not found", "error": None}


@pytest.mark.asyncio
async def test_get_problem_solved_flag(client, auth_headers, test_user, problem_set):
    headers = auth_headers(test_user)

    response = await client.get("/api/v1/problems/1", headers=headers)
    assert response.json()["is_solved"] is False

    await client.post(
        "/api/v1/submissions",
        json={"problemId": str(problem_set[0].id), "code": "print('0 1')", "language": "python"},
        headers=headers,
    )

    response = await client.get("/api/v1/problems/1", headers=headers)
    assert response.json()["is_solved"] is True


# Test creating problems
@pytest.mark.asyncio
async def test_create_problem_as_admin(client, auth_headers, admin_user, problem_set):
    problem_data = {
        "title": "Reverse a String",
        "description": "Print the input reversed.",
        "difficulty": "Easy",
        "category": "Strings",
        "tags": ["string"],
        "input_example": "abc",
        "expected_output": "cba",
    }

    response = await client.post(
        "/api/v1/problems", json=problem_data, headers=auth_headers(admin_user)
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["problem_number"] == 4
    assert data["title"] == "Reverse a String"
    assert data["tags"] == ["string"]


@pytest.mark.asyncio
async def test_create_problem_with_taken_number(client, auth_headers, admin_user, problem_set):
    problem_data = {"title": "Duplicate", "problem_number": 2}

    response = await client.post(
        "/api/v1/problems", json=problem_data, headers=auth_headers(admin_user)
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Problem number 2 already exists"


@pytest.mark.asyncio
async def test_create_problem_requires_admin(client, auth_headers, test_user):
    response = await client.post(
        "/api/v1/problems", json={"title": "Nope"}, headers=auth_headers(test_user)
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Admin privileges required"
