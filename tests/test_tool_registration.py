import pytest

import main
from github_issues_mcp.mcp_server.registry import _find_registered_tool, _registered_tool_names

EXPECTED_TOOLS = {
    "create_github_issue": False,
    "list_github_issues": True,
    "get_github_issue": True,
    "update_github_issue": False,
    "get_github_organisations": True,
    "list_github_repositories": True,
}


def test_registry_lists_every_tool_once():
    names = _registered_tool_names()
    assert sorted(names) == sorted(EXPECTED_TOOLS)
    assert len(names) == len(set(names))


def test_wrapper_metadata():
    assert main.update_github_issue.__mcp_tool_name__ == "update_github_issue"
    assert main.update_github_issue.__mcp_write_action__ is True
    assert main.list_github_issues.__mcp_write_action__ is False
    assert "issues" in main.list_github_issues.__mcp_tags__
    assert _find_registered_tool("get_github_issue") is not None
    assert _find_registered_tool("missing_tool") is None


@pytest.mark.asyncio
async def test_listed_tools_carry_read_only_hints_and_schemas():
    tools = {tool.name: tool for tool in await main.mcp.list_tools()}

    assert set(EXPECTED_TOOLS) <= set(tools)
    for name, read_only in EXPECTED_TOOLS.items():
        assert tools[name].annotations.readOnlyHint is read_only

    create_schema = tools["create_github_issue"].inputSchema
    assert set(create_schema["required"]) == {"owner", "repo", "title"}

    update_schema = tools["update_github_issue"].inputSchema
    assert set(update_schema["required"]) == {"owner", "repo", "issue_number"}
    assert "milestone" in update_schema["properties"]

    list_schema = tools["list_github_issues"].inputSchema["properties"]
    assert list_schema["per_page"]["maximum"] == 100
    assert list_schema["per_page"]["default"] == 30


@pytest.mark.asyncio
async def test_create_ticket_prompt_is_registered():
    prompts = {prompt.name for prompt in await main.mcp.list_prompts()}
    assert "create-ticket" in prompts
