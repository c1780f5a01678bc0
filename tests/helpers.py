def tamper_signature(token: str) -> str:
    """Change one character in the middle of a JWT signature."""
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    replacement = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + replacement + signature[i + 1:]])


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
