import asyncio
import sys

from movingco.core.exceptions import ConflictError
from movingco.db.base import create_tables
from movingco.db.session import dispose_engine, get_sessionmaker
from movingco.repositories.users import UserRepository
from movingco.services.auth import AuthService


async def create_admin_user(email: str, password: str, first_name: str = "", last_name: str = "") -> bool:
    try:
        await create_tables()
        async with get_sessionmaker()() as session:
            user = await AuthService(UserRepository(session)).create_admin(
                email, password, first_name=first_name, last_name=last_name
            )
            print(f"Admin user '{user.email}' created successfully")
            print(f"User ID: {user.id}")
            print(f"Role: {user.user_type}")
            return True

    except ConflictError:
        print(f"Error: User '{email}' already exists")
        return False
    except Exception as e:
        print(f"Error creating admin user: {str(e)}")
        return False
    finally:
        await dispose_engine()


def main():
    if len(sys.argv) < 3:
        print("Usage: python create_admin.py <email> <password> [first_name] [last_name]")
        sys.exit(1)

    email = sys.argv[1]
    password = sys.argv[2]
    first_name = sys.argv[3] if len(sys.argv) > 3 else ""
    last_name = sys.argv[4] if len(sys.argv) > 4 else ""

    if not email or not password:
        print("Error: email and password cannot be empty")
        sys.exit(1)

    success = asyncio.run(create_admin_user(email, password, first_name, last_name))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
