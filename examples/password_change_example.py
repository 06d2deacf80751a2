"""
Password Change Example - a validated service end to end

This example demonstrates:
- Declaring a schema with a predicate that reads the acting user
- Business logic adding its own errors
- The fail-lock on invalid input
- Success callbacks
"""

from types import SimpleNamespace

from validated_services import FilledStr, Service, define_schema, predicate, required
from validated_services.kernel.logging import configure_logging

COMMON_PASSWORDS = {"password", "123456", "qwerty"}

ChangePasswordSchema = define_schema(
    "ChangePasswordSchema",
    username=required(
        FilledStr,
        predicate("is_current_user", lambda value, options: options["user"].username == value),
    ),
    password=required(FilledStr),
    messages={"is_current_user": "can only change your own password"},
)


class ChangePassword(Service[SimpleNamespace], schema=ChangePasswordSchema):
    def options_for_context(self, context):
        return {"user": context}

    def execute(self, logic=None):
        super().execute(self.change_password)

    def change_password(self) -> bool:
        password = self.inputs["password"]
        if len(password) < 8:
            self.add_errors({"password": "less than 8 characters"})
        if password in COMMON_PASSWORDS:
            self.add_errors({"password": "is too easy"})
        if self.errors:
            return False
        self.context.password = password
        return True


@ChangePassword.on_success
def notify(service: ChangePassword) -> None:
    print(f"  notification sent to {service.context.username}")


def main() -> None:
    configure_logging(json_output=False, log_level="WARNING")
    alice = SimpleNamespace(username="alice", password="old")

    print("\n=== Valid change ===\n")
    service = ChangePassword(alice, {"username": "alice", "password": "correct horse"})
    service.execute()
    print(f"  succeeded={service.succeeded} errors={service.errors}")

    print("\n=== Weak password ===\n")
    service = ChangePassword(alice, {"username": "alice", "password": "qwerty"})
    service.execute()
    print(f"  succeeded={service.succeeded} errors={service.errors}")

    print("\n=== Someone else's account ===\n")
    service = ChangePassword(alice, {"username": "bob", "password": "correct horse"})
    service.execute()
    print(f"  succeeded={service.succeeded} errors={service.errors}")


if __name__ == "__main__":
    main()
