# flake8: noqa
# scripts/create_admin.py

import asyncio
import typer
from fastapi import HTTPException
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import AsyncSessionLocal, engine
from app.domains.usr import crud as usr_crud
from app.domains.usr import schemas as usr_schemas
from app.domains.usr.models import UserRole

cli = typer.Typer()


async def create_admin_user(db: AsyncSession, user_in: usr_schemas.UserCreate) -> bool:
    """
    데이터베이스에 관리자 사용자를 생성하는 비동기 함수.
    이미 존재하는 이메일이면 생성하지 않고 False를 반환합니다.
    """
    if await usr_crud.user.get_by_email(db, email=user_in.email):
        typer.echo(f"오류: 이미 존재하는 이메일입니다: {user_in.email}")
        return False

    try:
        await usr_crud.user.create(db, obj_in=user_in)
    except HTTPException as e:
        typer.echo(f"오류: {e.detail}")
        return False
    typer.echo(f"관리자 계정이 성공적으로 생성되었습니다: {user_in.email}")
    return True


@cli.command()
def main(
    email: str = typer.Option(
        ..., '--email', '-e',
        prompt="관리자 이메일을 입력하세요",
        help="생성할 관리자 계정의 이메일 주소입니다."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="관리자 비밀번호를 입력하세요",
        hide_input=True,
        confirmation_prompt=True,
        help="생성할 관리자 계정의 비밀번호입니다. (최소 6자 이상)"
    ),
    name: str = typer.Option(
        "Admin", '--name', '-n',
        prompt="관리자 이름을 입력하세요",
        help="관리자의 이름입니다."
    ),
    phone: str = typer.Option(
        ..., '--phone',
        prompt="관리자 연락처를 입력하세요",
        help="관리자의 연락처입니다."
    ),
):
    """
    건설 현장 관리 API의 첫 관리자(admin) 계정을 생성합니다.
    """
    try:
        user_data = usr_schemas.UserCreate(
            name=name,
            email=email,
            password=password,
            phone=phone,
            role=UserRole.ADMIN,
        )
    except ValidationError as e:
        typer.echo(f"오류: 입력값이 올바르지 않습니다.\n{e}")
        raise typer.Abort()

    typer.echo("관리자 계정 생성을 시작합니다...")

    async def run_creation() -> bool:
        try:
            async with AsyncSessionLocal() as db:
                return await create_admin_user(db=db, user_in=user_data)
        finally:
            await engine.dispose()

    if not asyncio.run(run_creation()):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
