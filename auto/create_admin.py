#!/usr/bin/env python3
"""
Create Admin User Script.

Creates an admin user directly in the database. The API has no signup flow,
so this is how the first account is created.

Usage:
    uv run python auto/create_admin.py
    uv run python auto/create_admin.py --email admin@example.com --password Secret123

Interactive Mode (no arguments):
    uv run python auto/create_admin.py
    # Script will prompt for each value

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@example.com)
    ADMIN_PASSWORD: Admin password (default: auto-generated)
    ADMIN_NAME: Display name (default: Admin)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from getpass import getpass
from os import environ
from pathlib import Path
from re import fullmatch
from secrets import token_urlsafe
from sys import exit as sys_exit
from sys import path as sys_path
from traceback import print_exc

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from app.configs import EMAIL_PATTERN, settings  # noqa: E402
from app.db.database import init_db, transaction  # noqa: E402
from app.errors import DuplicateEntryError  # noqa: E402
from app.managers.password_manager import hash_password  # noqa: E402
from app.repositories import UserRepository  # noqa: E402
from app.schemas import UserCreate, UserProfile  # noqa: E402


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin user creation data.

    Attributes
    ----------
    email : str
        Admin email address.
    password : str
        Admin password (will be hashed).
    name : str
        Admin display name.
    """

    email: str
    password: str
    name: str


def generate_secure_password(length: int = 16) -> str:
    """
    Generate a secure random password.

    Parameters
    ----------
    length : int
        Length of the random part (default: 16).

    Returns
    -------
    str
        Random password.
    """
    password = token_urlsafe(length)
    return f"Admin{password[:12]}!1"


def input_with_default(prompt: str, default: str) -> str:
    """Get user input, falling back to ``default`` on an empty answer."""
    user_input = input(f"{prompt} [{default}]: ").strip()
    return user_input if user_input else default


def input_password() -> str:
    """
    Get password from user securely.

    Returns
    -------
    str
        Password entered by user, or an auto-generated one.
    """
    print("\nPassword options:")
    print("  1. Enter your own password")
    print("  2. Auto-generate a secure password")
    choice = input("Select option [2]: ").strip() or "2"

    if choice != "1":
        password = generate_secure_password()
        print(f"\n✅ Auto-generated password: {password}")
        print("⚠️  Please save this password now! You won't see it again.")
        return password

    while True:
        password = getpass("Enter password: ")
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            print(f"❌ Password must be at least {settings.MIN_PASSWORD_LENGTH} characters.")
            continue
        confirm = getpass("Confirm password: ")
        if password != confirm:
            print("❌ Passwords do not match.")
            continue
        return password


def interactive_input() -> AdminUserData:
    """Get admin user data through interactive prompts."""
    print("=" * 60)
    print("Create Admin User - Interactive Mode")
    print("=" * 60)
    print("Press Enter to accept default values shown in [brackets]\n")

    email = input_with_default("Email", environ.get("ADMIN_EMAIL", "admin@example.com"))
    name = input_with_default("Name", environ.get("ADMIN_NAME", "Admin"))
    password = input_password()

    return AdminUserData(email=email, password=password, name=name)


def get_admin_data_from_args(args: Namespace) -> AdminUserData | None:
    """
    Build AdminUserData from command line arguments and environment.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments.

    Returns
    -------
    AdminUserData | None
        Admin data if enough values were provided, None to go interactive.
    """
    email = args.email or environ.get("ADMIN_EMAIL")
    password = args.password or environ.get("ADMIN_PASSWORD")
    name = args.name or environ.get("ADMIN_NAME", "Admin")

    if email is None:
        return None
    if password is None:
        if args.email is None:
            return None
        password = generate_secure_password()

    return AdminUserData(email=email, password=password, name=name)


def validate(admin_data: AdminUserData) -> str | None:
    """Return an error message when the admin data is unusable."""
    if not fullmatch(EMAIL_PATTERN, admin_data.email):
        return f"Invalid email: {admin_data.email}"
    if len(admin_data.password) < settings.MIN_PASSWORD_LENGTH:
        return f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
    if not admin_data.name.strip():
        return "Name cannot be empty"
    return None


async def create_admin_user(admin_data: AdminUserData) -> UserProfile:
    """
    Create an admin user in the database.

    Parameters
    ----------
    admin_data : AdminUserData
        Admin user data container.

    Returns
    -------
    UserProfile
        Created admin user, without the password hash.

    Raises
    ------
    DuplicateEntryError
        If a user with the email already exists.
    """
    await init_db()

    async with transaction() as session:
        repo = UserRepository(session)
        user_id = await repo.create(
            UserCreate(
                email=admin_data.email,
                name=admin_data.name,
                password=await hash_password(admin_data.password),
                role="admin",
            ),
        )
        profile = await repo.get_profile(user_id)

    if profile is None:
        msg = "Admin user vanished right after creation"
        raise RuntimeError(msg)
    return profile


def parse_args() -> Namespace:
    """Parse command line arguments."""
    parser = ArgumentParser(
        description="Create an admin user in the database.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode (prompts for values)
  uv run python auto/create_admin.py --interactive

  # Command-line arguments
  uv run python auto/create_admin.py -e admin@mysite.com -p MySecurePass123 -n "Site Admin"
        """,
    )

    parser.add_argument("-e", "--email", default=None, help="Admin email")
    parser.add_argument("-p", "--password", default=None, help="Admin password")
    parser.add_argument("-n", "--name", default=None, help="Admin display name")
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Force interactive mode even if arguments are provided",
    )

    return parser.parse_args()


async def main() -> int:
    """
    Run the admin creation process.

    Returns
    -------
    int
        Exit code (0 for success, 1 for error).
    """
    args = parse_args()

    admin_data = None if args.interactive else get_admin_data_from_args(args)
    if admin_data is None:
        try:
            admin_data = interactive_input()
        except (KeyboardInterrupt, EOFError):
            print("\n\n❌ Cancelled by user.")
            return 1

    if error := validate(admin_data):
        print(f"❌ {error}")
        return 1

    try:
        admin = await create_admin_user(admin_data)
    except DuplicateEntryError:
        print(f"\n❌ Error: User with email '{admin_data.email}' already exists")
        return 1
    except Exception as e:  # noqa: BLE001
        print(f"\n❌ Unexpected error: {e}")
        print_exc()
        return 1

    print("\n✅ Admin user created successfully!")
    print(f"   ID:    {admin.id}")
    print(f"   Email: {admin.email}")
    print(f"   Role:  {admin.role}")
    print("\nYou can now login with:")
    print("  curl -X POST 'http://localhost:8000/api/auth/login' \\")
    print("    -H 'Content-Type: application/json' \\")
    print(f"    -d '{{\"email\": \"{admin.email}\", \"password\": \"YOUR_PASSWORD\"}}' -c cookies.txt")
    return 0


if __name__ == "__main__":
    exit_code = asyncio_run(main())
    sys_exit(exit_code)
