# scripts/create_manager.py

import asyncio
import typer
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import AsyncSessionLocal, create_db_and_tables
from app.core.exceptions import ValidationError
from app.domains.usr import crud as usr_crud
from app.domains.usr import schemas as usr_schemas
from app.domains.usr.models import UserRole

cli = typer.Typer()


async def create_manager_user(
    db: AsyncSession,
    user_in: usr_schemas.UserCreate
) -> None:
    """
    데이터베이스에 매니저 사용자를 생성하는 비동기 함수
    """
    try:
        await usr_crud.user.create(db, obj_in=user_in, role=UserRole.MANAGER)
    except ValidationError as e:
        typer.echo(f"오류: {e.detail}")
        raise typer.Exit(code=1)
    typer.echo(f"매니저 계정이 성공적으로 생성되었습니다: {user_in.email} ({user_in.username})")


@cli.command()
def main(
    email: str = typer.Option(
        ..., '--email', '-e',
        prompt="매니저 이메일을 입력하세요",
        help="생성할 매니저 계정의 이메일 주소입니다."
    ),
    username: str = typer.Option(
        ..., '--username', '-u',
        prompt="매니저 사용자명(ID)을 입력하세요",
        help="로그인 시 사용할 사용자명(ID)입니다."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="매니저 비밀번호를 입력하세요",
        hide_input=True,
        confirmation_prompt=True,
        help="생성할 매니저 계정의 비밀번호입니다. (최소 8자 이상)"
    ),
    first_name: str = typer.Option("Site", '--first-name', help="매니저의 이름입니다."),
    last_name: str = typer.Option("Manager", '--last-name', help="매니저의 성입니다."),
):
    """
    LogiTrack 애플리케이션을 위한 새로운 매니저(MANAGER) 계정을 생성합니다.
    """
    if len(password) < 8:
        typer.echo("오류: 비밀번호는 최소 8자 이상이어야 합니다.")
        raise typer.Abort()

    user_data = usr_schemas.UserCreate(
        email=email,
        username=username,
        password=password,
        first_name=first_name,
        last_name=last_name,
    )

    async def run_creation():
        await create_db_and_tables()
        async with AsyncSessionLocal() as db:
            await create_manager_user(db=db, user_in=user_data)

    asyncio.run(run_creation())


if __name__ == "__main__":
    cli()
