"""Payload builders for webhook tests"""


def issue_payload(action="opened", number=42, title="T", login="u", repo="o/r"):
    return {
        "action": action,
        "repository": {"full_name": repo},
        "issue": {"number": number, "title": title, "user": {"login": login}},
    }


def pull_request_payload(action="closed", number=10, merged=True, repo="o/r"):
    return {
        "action": action,
        "repository": {"full_name": repo},
        "pull_request": {
            "number": number,
            "title": "Feature PR",
            "merged": merged,
            "user": {"login": "dev"},
        },
    }
