from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ....application.dto import RegisterUserInput, UploadedDocument
from ....application.use_cases.login_user import LoginUser
from ....application.use_cases.register_user import RegisterUser
from ....domain.entities import Role
from ....domain.errors import AuthError, MissingDocument, TokenExpired, TokenInvalid, UnsupportedMediaType
from ....infrastructure.metrics import login_attempts_total, registrations_total
from ....infrastructure.security import TokenIssuer
from ..deps import get_login_user, get_register_user, get_token_issuer
from ..schemas import LoginReq, LoginResp, RegisterResp, UserOut

router = APIRouter(tags=["auth"])
bearer = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE = "access_token"
# file problems answer in plain text, field problems in JSON, as the legacy API did
PLAIN_TEXT_REGISTER_ERRORS = (MissingDocument, UnsupportedMediaType)


@router.post("/login", response_model=LoginResp)
def login(
    payload: LoginReq,
    response: Response,
    uc: LoginUser = Depends(get_login_user),
):
    try:
        result = uc.execute(payload.usuario, payload.password)
    except AuthError as e:
        login_attempts_total.labels(outcome=type(e).__name__).inc()
        # plain-text bodies, as the existing frontend expects
        return PlainTextResponse(e.message, status_code=e.status_code)

    login_attempts_total.labels(outcome="success").inc()
    response.set_cookie(ACCESS_TOKEN_COOKIE, result.token, max_age=result.expires_in)
    return LoginResp(usuario=result.display_name, token=result.token)


@router.post("/register", response_model=RegisterResp, status_code=status.HTTP_201_CREATED)
def register(
    nombre: str | None = Form(None),
    apellido: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None, alias="contraseña"),
    tipoUsuario: str | None = Form(None),
    imagen: UploadFile | None = File(None),
    uc: RegisterUser = Depends(get_register_user),
):
    data = RegisterUserInput(
        name=nombre, surname=apellido, email=email, password=password, role=tipoUsuario,
    )
    document = None
    if imagen is not None and imagen.filename:
        document = UploadedDocument(filename=imagen.filename, file=imagen.file)
    role_label = tipoUsuario if Role.parse(tipoUsuario) else "invalid"

    try:
        result = uc.execute(data, document)
    except AuthError as e:
        registrations_total.labels(role=role_label, outcome=type(e).__name__).inc()
        if isinstance(e, PLAIN_TEXT_REGISTER_ERRORS):
            return PlainTextResponse(e.message, status_code=e.status_code)
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    registrations_total.labels(role=role_label, outcome="success").inc()
    return RegisterResp(
        message=result.message,
        user=UserOut.from_identity(result.identity),
        token=result.token,
        imageUrl=result.document_url,
    )


@router.get("/me")
def me(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """Claims of the caller's token, taken from the bearer header or the session cookie."""
    token = creds.credentials if creds else request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return tokens.verify(token)
    except TokenExpired:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except TokenInvalid:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
