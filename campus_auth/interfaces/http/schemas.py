from pydantic import BaseModel, ConfigDict, Field

from ...domain.entities import Identity


class LoginReq(BaseModel):
    # Missing fields are reported by the login use case as 400, not 422.
    model_config = ConfigDict(populate_by_name=True)

    usuario: str | None = None
    password: str | None = Field(default=None, alias="contraseña")


class LoginResp(BaseModel):
    usuario: str
    token: str


class UserOut(BaseModel):
    id: int
    nombre: str
    apellido: str
    email: str
    foto: str
    tipoUsuario: str

    @classmethod
    def from_identity(cls, identity: Identity) -> "UserOut":
        return cls(
            id=identity.id,
            nombre=identity.name,
            apellido=identity.surname,
            email=identity.email,
            foto=identity.document_url,
            tipoUsuario=identity.role.value,
        )


class RegisterResp(BaseModel):
    message: str
    user: UserOut
    token: str
    imageUrl: str
