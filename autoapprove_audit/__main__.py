from .audit_auto_approve import app

app(prog_name="autoapprove-audit")
